"""reformql schema layer: descriptors, record base classes and protocols."""
from reformql.schema.descriptor import Table, View
from reformql.schema.interfaces import (
    BeforeInserter,
    BeforeUpdater,
    Loadable,
    RecordLike,
    StructLike,
)
from reformql.schema.record import Column, Record, Struct, generate_descriptor

__all__ = [
    "BeforeInserter",
    "BeforeUpdater",
    "Column",
    "Loadable",
    "Record",
    "RecordLike",
    "Struct",
    "StructLike",
    "Table",
    "View",
    "generate_descriptor",
]
