"""
Nodes for the progressive notes workflow.
"""

from .capture import CaptureNode
from .content_extractor import ContentExtractor, ExtractionRequest
from .creative_output import CreativeOutputNode
from .distill import DistillNode, target_word_count
from .executive_summary import ExecutiveSummaryNode
from .file_saver import FileSaver, LayerItem, RenderedLayer, render_layer
from .input_detector import InputDetector
from .key_passages import KeyPassagesNode
from .layer_base import LayerNode, LayerRequest

__all__ = [
    "InputDetector",
    "ContentExtractor",
    "ExtractionRequest",
    "LayerNode",
    "LayerRequest",
    "CaptureNode",
    "KeyPassagesNode",
    "DistillNode",
    "target_word_count",
    "ExecutiveSummaryNode",
    "CreativeOutputNode",
    "FileSaver",
    "LayerItem",
    "RenderedLayer",
    "render_layer",
]
