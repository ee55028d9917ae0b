"""Scanner package exports."""
from .engine import Scanner, ScannerConfig, scan_text
from .registry import Detector, DetectorRegistry

__all__ = ["Scanner", "ScannerConfig", "scan_text", "Detector", "DetectorRegistry"]
