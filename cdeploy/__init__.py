"""cdeploy - build, push and deploy containers from a CD pipeline"""

__version__ = "1.0.0"
