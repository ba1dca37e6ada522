"""
Test suite for the proposal import service.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_row_classifier.py -v
"""
