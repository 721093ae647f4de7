"""Static constants shared by the API layer."""

PROJECT_NAME = "Moolaegis"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
