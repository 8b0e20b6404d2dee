from linkshortener.core.link_table import LinkTable
from linkshortener.core.allocator import CodeAllocator
from linkshortener.core.recorder import VisitRecorder
from linkshortener.core.registry import UrlRegistry


__all__ = [
    'LinkTable',
    'CodeAllocator',
    'VisitRecorder',
    'UrlRegistry',
]
