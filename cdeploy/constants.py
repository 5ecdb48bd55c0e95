"""
cdeploy Constants

Centralized constants for paths, naming patterns and registry/CLI literals.
"""

# Environment files
ENV_FILE_PATTERN = ".circleci/env/{env}.env"

# Registry Configuration
ECR_HOST_PATTERN = "{account}.dkr.ecr.{region}.amazonaws.com"
LATEST_TAG = "latest"
REVISION_LENGTH = 8
REGISTRY_USERNAME = "AWS"

# Stack Configuration
STACK_TEMPLATE_NAME = "stack.yml"
PARAMETERS_DIR = "parameters"
SERVICE_STACK_PATTERN = "{env}-service-{app}"
FUNCTION_STACK_PATTERN = "{env}-{app}"
PACKAGED_TEMPLATE = "packaged-application.yml"
STACK_CAPABILITIES = "CAPABILITY_NAMED_IAM"

# Apps whose name contains this marker are deployed as functions
FUNCTION_APP_MARKER = "lambda"

# Error classification (substrings of CLI error output)
OP_DESCRIBE_IMAGES = "describe-images"
OP_PUSH = "push"
IMAGE_NOT_FOUND_MARKER = "ImageNotFoundException"
IMMUTABLE_TAG_MARKER = "cannot be overwritten because the repository is immutable"

# Log Configuration
LOG_DIR_ENV_VAR = "CDEPLOY_LOG_DIR"
DEFAULT_LOG_DIR = ".cdeploy/logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Required parameters per command
COMMON_PARAMS = ["env", "region", "account"]
BUILD_PARAMS = ["dockerfile_path", "app_name", "build_dir"]
DEPLOY_PARAMS = ["app_name", "stack_dir"]
