from .inputs import AppInputs, InputsLoader, RunOptions, ValidationIssue, load_inputs, safe_validate

__all__ = ["AppInputs", "InputsLoader", "RunOptions", "ValidationIssue", "load_inputs", "safe_validate"]
