import os
from dotenv import load_dotenv

load_dotenv()


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me-0123456789")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # sqlalchemy | memory
    BUILDER_GATEWAY = os.getenv("BUILDER_GATEWAY", "sqlalchemy")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # Builder sessions kept in memory per process, least recently used evicted
    BUILDER_MAX_SESSIONS = int(os.getenv("BUILDER_MAX_SESSIONS", "500"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///storefront-dev.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "testing-jwt-secret-with-enough-length-0123456789"


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
