"""Pipeline modules for orchestrating complex workflows."""

from .parallel_text_pipeline import ParallelTextPipeline, ParallelTextPipelineConfig

__all__ = [
    "ParallelTextPipeline",
    "ParallelTextPipelineConfig",
]
