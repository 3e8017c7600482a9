from .parser import parse, parse_dict
from .validator import validate, ValidationResult
from .model import MAX_TOPIC_LENGTH, Catalog, Topic

__all__ = ["parse", "parse_dict", "validate", "ValidationResult", "Catalog", "Topic", "MAX_TOPIC_LENGTH"]
