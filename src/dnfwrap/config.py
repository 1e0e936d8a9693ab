import configparser
from pathlib import Path
from typing import Optional, TextIO, Union

from .client import Options
from .logger import setup_logger

_logger = setup_logger()


class Config:
    def __init__(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        self.config_dir = Path(config_dir) if config_dir else Path.home() / ".config" / "dnfwrap"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path = self.config_dir / "dnfwrap.conf"

        # Default values
        self.binary_path: str = ""
        self.log_level: str = "INFO"

        self.verbose: bool = False
        self.dry_run: bool = False
        self.assume_yes: bool = True
        self.destdir: str = ""

        self.load()

    def load(self) -> None:
        parser = configparser.ConfigParser()
        if not self.config_path.exists():
            _logger.warning(f"Config file {self.config_path} not found. Creating default config.")
            self._write_default_config()

        parser.read(self.config_path)

        # [general]
        self.binary_path = parser.get("general", "binary_path", fallback=self.binary_path).strip()
        self.log_level = parser.get("general", "log_level", fallback=self.log_level).strip().upper()

        # [options]
        if parser.has_section("options"):
            self.verbose = parser.getboolean("options", "verbose", fallback=False)
            self.dry_run = parser.getboolean("options", "dry_run", fallback=False)
            self.assume_yes = parser.getboolean("options", "assume_yes", fallback=True)
            self.destdir = parser.get("options", "destdir", fallback="").strip()

    def options(self, output: Optional[TextIO] = None) -> Options:
        """Default per-command options built from the [options] section."""
        return Options(
            verbose=self.verbose,
            dry_run=self.dry_run,
            output=output,
            not_assume_yes=not self.assume_yes,
            destdir=self.destdir,
        )

    def _write_default_config(self) -> None:
        parser = configparser.ConfigParser()
        parser["general"] = {
            "binary_path": self.binary_path,
            "log_level": self.log_level,
        }
        parser["options"] = {
            "verbose": str(self.verbose).lower(),
            "dry_run": str(self.dry_run).lower(),
            "assume_yes": str(self.assume_yes).lower(),
            "destdir": self.destdir,
        }
        with self.config_path.open("w") as f:
            parser.write(f)
        _logger.info(f"Default config written to {self.config_path}")
