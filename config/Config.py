# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # Azure OpenAI (embeddings)
    openai_azure_api_key: str = ""
    openai_azure_endpoint: str = ""
    openai_azure_embed_deployment: str = ""

    # Chroma Vector Database
    chroma_api_key: str = ""
    chroma_tenant: str = ""
    chroma_database: str = ""

    # Collaborating services (document source)
    jobs_service_url: str = ""
    profiles_service_url: str = ""

    # Embedding record store
    database_url: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # Azure OpenAI
        "openai_azure_api_key": "AZURE_OPENAI_API_KEY",
        "openai_azure_endpoint": "AZURE_OPENAI_ENDPOINT",
        "openai_azure_embed_deployment": "AZURE_OPENAI_EMBED_DEPLOYMENT",

        # Chroma
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",

        # Services
        "jobs_service_url": "MATCHING_JOBS_SERVICE_URL",
        "profiles_service_url": "MATCHING_PROFILES_SERVICE_URL",

        # Record store
        "database_url": "MATCHING_DATABASE_URL",
    }

    # Convenient *groups* for use in tests / backend selection
    AZURE_OPENAI_ENV_VARS = (
        "AZURE_OPENAI_API_KEY",
        "AZURE_OPENAI_ENDPOINT",
    )

    CHROMA_ENV_VARS = (
        "CHROMA_API_KEY",
        "CHROMA_TENANT",
        "CHROMA_DATABASE",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or "").strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    @property
    def use_azure_openai(self) -> bool:
        return bool(self.openai_azure_endpoint and self.openai_azure_api_key)

    @property
    def use_chroma(self) -> bool:
        return bool(self.chroma_api_key and self.chroma_tenant and self.chroma_database)

    @property
    def use_sql_store(self) -> bool:
        return bool(self.database_url)

    def require(self, *field_names: str) -> None:
        """
        Fail fast if any of the named fields is empty.

        Backends call this for the subset they actually need, so a
        memory-only deployment does not have to set cloud credentials.
        """
        missing_fields = [f for f in field_names if not getattr(self, f)]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_azure_endpoint": self.openai_azure_endpoint,
            "openai_azure_embed_deployment": self.openai_azure_embed_deployment,
            "chroma_tenant": self.chroma_tenant,
            "chroma_database": self.chroma_database,
            "jobs_service_url": self.jobs_service_url,
            "profiles_service_url": self.profiles_service_url,
            "database": self.database_url.split("://", 1)[0] if self.database_url else "memory",
        }
