"""Index regeneration entry point."""

from dataclasses import replace

from docsite.pipeline.config import Config
from docsite.pipeline.index import IndexBuilder


def run_full_pipeline(
    config: Config | None = None,
    docs_dir: str = "",
    output_path: str = "",
    summary: bool = False,
) -> dict:
    """Regenerate the docs index from the docs directory.

    Args:
        config: Pipeline configuration (recommended)
        docs_dir: Source directory with Markdown files (overrides config)
        output_path: Snapshot path (overrides config)
        summary: Write the search projection instead of full records

    Returns:
        Build statistics dict
    """
    pipeline_config = config or Config.from_env()

    # Override paths if provided
    if docs_dir:
        pipeline_config = replace(pipeline_config, docs_dir=docs_dir)
    if output_path:
        pipeline_config = replace(pipeline_config, index_path=output_path)

    builder = IndexBuilder(config=pipeline_config)
    return builder.build_and_persist(summary=summary)
