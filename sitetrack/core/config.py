"""
Core configuration module for the SiteTrack workflow engine.
Settings are read from environment variables into typed sections.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass
class AWSConfig:
    """AWS service configuration (CloudWatch log shipping)"""
    region: str = "us-east-1"
    log_group_prefix: str = "/sitetrack"


@dataclass
class MonitoringConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    enable_cloudwatch: bool = False


@dataclass
class AppConfig:
    """Web application settings used when building links"""
    app_url: str = "http://localhost:3000"


class Config:
    """Main configuration class that loads all settings from the environment"""

    def __init__(self):
        self.aws = AWSConfig()
        self.monitoring = MonitoringConfig()
        self.app = AppConfig()

        self.environment = "development"
        self.load_from_environment()

    def load_from_environment(self) -> None:
        """Load (or reload) every section from environment variables"""
        self.environment = os.getenv("ENVIRONMENT", "development")

        self.aws.region = os.getenv("AWS_REGION", AWSConfig.region)
        self.aws.log_group_prefix = os.getenv("SITETRACK_LOG_GROUP_PREFIX", AWSConfig.log_group_prefix)

        explicit_level = os.getenv("SITETRACK_LOG_LEVEL")
        self.monitoring.log_level = explicit_level or MonitoringConfig.log_level
        self.monitoring.enable_cloudwatch = _env_flag("SITETRACK_ENABLE_CLOUDWATCH")

        self.app.app_url = (
            os.getenv("SITETRACK_APP_URL")
            or os.getenv("NEXT_PUBLIC_APP_URL")
            or AppConfig.app_url
        ).rstrip("/")

        self._update_environment_settings(explicit_level is not None)

    def _update_environment_settings(self, level_is_explicit: bool) -> None:
        """Update settings based on environment"""
        if self.environment == "production":
            self.monitoring.log_level = "WARNING"
        elif self.environment == "development" and not level_is_explicit:
            self.monitoring.log_level = "DEBUG"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_log_group_name(self, name: str) -> str:
        """Get full CloudWatch log group name with prefix"""
        return f"{self.aws.log_group_prefix}/{self.environment}/{name}"


# Global configuration instance
config = Config()
