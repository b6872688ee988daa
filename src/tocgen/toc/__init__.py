from tocgen.toc.builder import HierarchyBuilder, TocNode, build_heading_forest, render_toc
from tocgen.toc.scanner import HeadingScanner, HeadingToken, scan_headings
from tocgen.toc.slug import slugify

__all__ = [
    "HeadingScanner",
    "HeadingToken",
    "HierarchyBuilder",
    "TocNode",
    "build_heading_forest",
    "render_toc",
    "scan_headings",
    "slugify",
]
