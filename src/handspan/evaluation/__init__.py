"""Evaluation — compare computed fingerings with reference annotations.

Sub-package containing:
    dataset    – ground-truth annotation loading and validation
    evaluator  – accuracy metrics and batch scoring
"""
