"""Configuration management for the network resilience engine."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class AnalysisConfig:
    """Algorithm front-end configuration."""

    default_hub: str | None = None
    show_trace: bool = False


@dataclass
class ReportConfig:
    """Report generation configuration."""

    default_format: str = "html"
    title: str = "Network Resilience Report"


@dataclass
class Config:
    """Main configuration for the network resilience engine."""

    results_dir: Path = field(default_factory=lambda: Path("./results"))
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.results_dir, str):
            self.results_dir = Path(self.results_dir)

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from JSON file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        config = cls()
        if "results_dir" in data:
            config.results_dir = Path(data["results_dir"])
        if "verbose" in data:
            config.verbose = data["verbose"]

        if "analysis" in data:
            for key, value in data["analysis"].items():
                if hasattr(config.analysis, key):
                    setattr(config.analysis, key, value)

        if "report" in data:
            for key, value in data["report"].items():
                if hasattr(config.report, key):
                    setattr(config.report, key, value)

        return config

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        data = {
            "results_dir": str(self.results_dir),
            "verbose": self.verbose,
            "analysis": {
                "default_hub": self.analysis.default_hub,
                "show_trace": self.analysis.show_trace,
            },
            "report": {
                "default_format": self.report.default_format,
                "title": self.report.title,
            },
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config_path = Path(os.environ.get("NETRESILIENCE_CONFIG", ".netresilience.json"))
        _config = Config.from_file(config_path)
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
