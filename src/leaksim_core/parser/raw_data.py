# src/leaksim_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path

# Intermediate Representation (IR) handed from the ExperimentConfigParser to the
# experiment builder. Values are kept exactly as written in the YAML file; unit
# conversion and range checks happen in the parameters package.


@dataclass(frozen=True)
class ParsedProcedureStep:
    """IR for one scripted command, e.g. ``{command: discharge, duration: "30 s"}``."""
    index: int
    command: str
    raw_duration: Any = None


@dataclass(frozen=True)
class ParsedExperimentConfig:
    """Top-level IR node representing a single parsed experiment file."""
    experiment_name: str
    source_path: Path
    raw_parameters: Dict[str, Any] = field(default_factory=dict)
    raw_noise_amplitude: Any = None
    seed: Optional[int] = None
    raw_frame_rate: Any = None
    procedure: List[ParsedProcedureStep] = field(default_factory=list)
