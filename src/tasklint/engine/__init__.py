"""Validation engine, pipeline and progress reporting."""

from tasklint.engine.engine import ValidationEngine, ensure_valid, validate, validate_file, validate_text
from tasklint.engine.pipeline import (
    PRESETS,
    Pipeline,
    PipelineStep,
    build_validators,
    default_validators,
    minimal_validators,
    preset,
    strict_validators,
)
from tasklint.engine.progress import REFERENCES_PHASE, TASKS_PHASE, NullValidationProgress, ValidationProgress

__all__ = [
    "PRESETS",
    "REFERENCES_PHASE",
    "TASKS_PHASE",
    "NullValidationProgress",
    "Pipeline",
    "PipelineStep",
    "ValidationEngine",
    "ValidationProgress",
    "build_validators",
    "default_validators",
    "ensure_valid",
    "minimal_validators",
    "preset",
    "strict_validators",
    "validate",
    "validate_file",
    "validate_text",
]
