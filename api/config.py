"""Configuration management using Pydantic Settings."""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden using environment variables or .env file.
    """

    # Neo4j Database Configuration
    neo4j_uri: str = Field(
        default="bolt://localhost:7687",
        description="Neo4j database connection URI"
    )
    neo4j_user: str = Field(
        default="neo4j",
        description="Neo4j username"
    )
    neo4j_password: str = Field(
        ...,
        description="Neo4j password (required)"
    )
    neo4j_database: Optional[str] = Field(
        default=None,
        description="Neo4j database name. If not set, the server default database is used"
    )
    neo4j_max_pool_size: int = Field(
        default=50,
        description="Maximum number of pooled driver connections"
    )
    neo4j_connection_timeout: float = Field(
        default=30.0,
        description="Seconds to wait for a pooled connection"
    )
    neo4j_query_timeout: float = Field(
        default=15.0,
        description="Transaction timeout in seconds applied to every query"
    )

    # Application Settings
    app_name: str = Field(
        default="Truck Leasing API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag"
    )
    cors_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: str = Field(
        default="logs/api.log",
        description="Path to log file"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

        # Allow extra fields from environment
        extra = "ignore"

        # Example values for documentation
        json_schema_extra = {
            "example": {
                "neo4j_uri": "bolt://localhost:7687",
                "neo4j_user": "neo4j",
                "neo4j_password": "secure_password",
                "neo4j_query_timeout": 15.0,
                "debug": False,
                "log_level": "INFO"
            }
        }


# Create a singleton instance
settings = Settings()
