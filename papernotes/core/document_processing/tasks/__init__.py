"""
Task modules for the notes pipeline.

Exports: DownloadTask, PagePruningTask, PartitioningTask, ChunkingTask,
SavingTask, VectorStoreTask, PersistenceTask, join_segments, generate_chunk_id
"""

from .chunking_task import ChunkingTask, join_segments
from .download_task import DownloadTask
from .page_pruning_task import PagePruningTask
from .partitioning_task import PartitioningTask
from .persistence_task import PersistenceTask
from .saving_task import SavingTask
from .vector_store_task import VectorStoreTask, generate_chunk_id

__all__ = [
    "DownloadTask",
    "PagePruningTask",
    "PartitioningTask",
    "ChunkingTask",
    "SavingTask",
    "VectorStoreTask",
    "PersistenceTask",
    "join_segments",
    "generate_chunk_id",
]
