import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("TENANTKIT_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenantkit.db")
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite:///./tenantkit.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    # Tenant resolution
    TENANT_SOURCE = data.get("TENANT_SOURCE", "header")
    TENANT_HEADER_NAME = data.get("TENANT_HEADER_NAME", "x-tenant-slug")
    TENANT_QUERY_KEY = data.get("TENANT_QUERY_KEY", "tenant")
    TENANT_PATH_INDEX = int(data.get("TENANT_PATH_INDEX", 1))
    TENANT_SUBDOMAIN_EXCLUSIONS = data.get("TENANT_SUBDOMAIN_EXCLUSIONS", ["www", "localhost"])
    TENANT_REQUIRED = bool(data.get("TENANT_REQUIRED", True))
    DEFAULT_TENANT_SLUG = data.get("DEFAULT_TENANT_SLUG", "default")
    # Role the application connects as; migrations grant it DML on every table
    APP_DB_ROLE = data.get("APP_DB_ROLE", "tenantkit_app")
