from docbrief.analysis.analyzer import Analyzer
from docbrief.analysis.base import BaseAnalyzer
from docbrief.analysis.factory import AnalyzerFactory

__all__ = ["Analyzer", "AnalyzerFactory", "BaseAnalyzer"]
