from .nodes import DocString, Feature, Features, Node, Scenario, Step, Visitor
from .parser import FeaturesParser, Lexer, LexerEventHandler, LexerFactory, ParseError

__all__ = [
    "DocString",
    "Feature",
    "Features",
    "Node",
    "Scenario",
    "Step",
    "Visitor",
    "FeaturesParser",
    "Lexer",
    "LexerEventHandler",
    "LexerFactory",
    "ParseError",
]
