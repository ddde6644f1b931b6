"""Configuration management for installment-tracker."""

from dataclasses import dataclass, field
from pathlib import Path

from installment_tracker.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "json", "postgres")
RECEIPT_BACKENDS = ("local", "inline")


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "installments"
    user: str = "postgres"
    password: str = "postgres"
    table: str = "app_data"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StorageConfig:
    """State store configuration."""

    backend: str = "json"
    data_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False


@dataclass
class ReceiptConfig:
    """Receipt image storage configuration."""

    backend: str = "local"
    receipt_dir: Path = field(default_factory=lambda: Path("data"))
    max_bytes: int = 5 * 1024 * 1024


@dataclass
class TrackerConfig:
    """Main configuration for installment-tracker."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    receipts: ReceiptConfig = field(default_factory=ReceiptConfig)
    user_id: str | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Check backend names and required values.

        Raises
        ------
        ConfigurationError
            If a backend is unknown, the user id is missing or a limit is not positive.
        """
        if self.storage.backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend {self.storage.backend!r}, expected one of {STORAGE_BACKENDS}"
            )
        if self.receipts.backend not in RECEIPT_BACKENDS:
            raise ConfigurationError(
                f"Unknown receipt backend {self.receipts.backend!r}, expected one of {RECEIPT_BACKENDS}"
            )
        if self.storage.backend != "memory" and not self.user_id:
            raise ConfigurationError("A user id is required for persistent storage (TRACKER_USER_ID)")
        if self.receipts.max_bytes <= 0:
            raise ConfigurationError("Receipt size limit must be positive")

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Create config from environment variables."""
        import os

        data_dir = Path(os.getenv("TRACKER_DATA_DIR", "data"))

        storage = StorageConfig(
            backend=os.getenv("TRACKER_STORAGE", "json"),
            data_dir=data_dir,
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            database=os.getenv("POSTGRES_DB", "installments"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            table=os.getenv("POSTGRES_TABLE", "app_data"),
        )

        receipts = ReceiptConfig(
            backend=os.getenv("TRACKER_RECEIPTS", "local"),
            receipt_dir=Path(os.getenv("TRACKER_RECEIPT_DIR", str(data_dir))),
            max_bytes=int(os.getenv("TRACKER_RECEIPT_MAX_BYTES", str(5 * 1024 * 1024))),
        )

        return cls(
            storage=storage,
            postgres=postgres,
            receipts=receipts,
            user_id=os.getenv("TRACKER_USER_ID") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def new_user_id() -> str:
    """Generate an opaque id used to key one user's document in storage."""
    import uuid

    return uuid.uuid4().hex
