"""
Model description loader (JSON/YAML documents to Model).
"""

from .loader import ModelBuilder, load_model, model_from_dict

__all__ = ["ModelBuilder", "load_model", "model_from_dict"]
