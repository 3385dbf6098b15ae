"""Configuration management for the alignment checker."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

SORT_CHOICES = ("location", "savings")
FORMAT_CHOICES = ("text", "json")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _split_paths(value: str) -> list[Path]:
    return [Path(part.strip()) for part in value.split(",") if part.strip()]


@dataclass
class Config:
    """Configuration for the alignment checker."""

    elf_file_paths: list[Path] = field(default_factory=list)
    verbose: bool = False
    debug: bool = False
    max_align: int | None = None
    struct_names: list[str] = field(default_factory=list)
    sort_by: str = "location"
    output_format: str = "text"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, env_path: Path | None = None) -> "Config":
        """
        Load configuration from environment variables or .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        max_align_str = os.getenv("MAX_ALIGN", "").strip()
        try:
            max_align = int(max_align_str) if max_align_str else None
        except ValueError:
            raise ValueError(f"MAX_ALIGN must be an integer, got {max_align_str!r}") from None

        return cls(
            elf_file_paths=_split_paths(os.getenv("ELF_FILE_PATH", "")),
            verbose=_parse_bool(os.getenv("VERBOSE", "false")),
            debug=_parse_bool(os.getenv("DEBUG", "false")),
            max_align=max_align,
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
        )

    @classmethod
    def from_args(
        cls,
        elf_file_paths: list[Path] | None = None,
        verbose: bool | None = None,
        debug: bool | None = None,
        max_align: int | None = None,
        struct_names: list[str] | None = None,
        sort_by: str | None = None,
        output_format: str | None = None,
        log_dir: Path | None = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Returns:
            Config object
        """
        config = cls.from_env()

        if elf_file_paths:
            config.elf_file_paths = list(elf_file_paths)
        if verbose:
            config.verbose = verbose
        if debug:
            config.debug = debug
        if max_align is not None:
            config.max_align = max_align
        if struct_names:
            config.struct_names = list(struct_names)
        if sort_by is not None:
            config.sort_by = sort_by
        if output_format is not None:
            config.output_format = output_format
        if log_dir is not None:
            config.log_dir = log_dir

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.elf_file_paths:
            raise ValueError("No ELF file given (pass one or set ELF_FILE_PATH)")

        for elf_file_path in self.elf_file_paths:
            if not elf_file_path.exists():
                raise ValueError(f"ELF file not found: {elf_file_path}")
            if not elf_file_path.is_file():
                raise ValueError(f"Not a file: {elf_file_path}")

        if self.max_align is not None:
            if self.max_align < 1 or self.max_align & (self.max_align - 1):
                raise ValueError(
                    f"Maximum alignment must be a positive power of two, got {self.max_align}"
                )

        if self.sort_by not in SORT_CHOICES:
            raise ValueError(f"Unknown sort order: {self.sort_by}")
        if self.output_format not in FORMAT_CHOICES:
            raise ValueError(f"Unknown output format: {self.output_format}")
