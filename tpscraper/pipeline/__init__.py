"""Post-processing pipeline for scraped reviews."""

from tpscraper.pipeline.sink import DatasetSink

__all__ = [
    "DatasetSink",
]
