"""Runtime configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WorkerConfig:
    chunk_size: int = 1  # bytes absorbed per loop iteration
    pace_seconds: float = 0.0  # delay after each absorbed chunk
    progress_events: bool = False  # emit UnitAbsorbed per chunk

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.pace_seconds < 0:
            raise ValueError(f"pace_seconds must be >= 0, got {self.pace_seconds}")


@dataclass
class DemoConfig:
    message: bytes = b"Hello World!"
    deadline_seconds: float = 0.3
    pace_seconds: float = 0.2
    log_level: str = "INFO"


@dataclass
class RuntimeConfig:
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
