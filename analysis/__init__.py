"""
analysis — analizy skompilowanych polityk.

Moduły:
  extension  — Extension, ExtensionCalculator, extend, find_rules, find_extension
  conflicts  — ConflictType, Conflict, ConflictAnalyzer
  batch      — BatchConflictAnalyzer (pula wątków)
  flows      — FlowMode, Flow, FlowTracer, get_flow_restriction
  crossflows — CrossFlow, CrossFlowTracer
  thesaurus  — ThesaurusExtractor
"""

from .batch import BatchConflictAnalyzer
from .conflicts import Conflict, ConflictAnalyzer, ConflictType, merge_conflicts
from .crossflows import CrossFlow, CrossFlowTracer
from .extension import Extension, ExtensionCalculator, extend, find_extension, find_rules
from .flows import Flow, FlowMode, FlowTracer, get_flow_restriction
from .thesaurus import ThesaurusExtractor

__all__ = [
    "Extension",
    "ExtensionCalculator",
    "extend",
    "find_rules",
    "find_extension",
    "ConflictType",
    "Conflict",
    "ConflictAnalyzer",
    "merge_conflicts",
    "BatchConflictAnalyzer",
    "FlowMode",
    "Flow",
    "FlowTracer",
    "get_flow_restriction",
    "CrossFlow",
    "CrossFlowTracer",
    "ThesaurusExtractor",
]
