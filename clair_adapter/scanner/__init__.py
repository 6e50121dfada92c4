"""Layer chain building, submission and report translation."""

from clair_adapter.scanner.image_scanner import ImageScanner
from clair_adapter.scanner.layer_chain import LayerChainBuilder, chain_layers
from clair_adapter.scanner.report_translator import items, map_severity, overview, translate
from clair_adapter.scanner.scan_driver import ScanDriver

__all__ = [
    "ImageScanner",
    "LayerChainBuilder",
    "ScanDriver",
    "chain_layers",
    "items",
    "map_severity",
    "overview",
    "translate",
]
