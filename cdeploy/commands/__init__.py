"""cdeploy commands"""
