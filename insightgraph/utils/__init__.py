"""
Utils module - Shared utilities for InsightGraph

This module provides common utilities used across the project:
- text_processing: Tokenizing, sentence splitting, normalisation
- io_helpers: File I/O with proper encoding
- logging_helper: Consistent logging setup
- config: Settings from YAML and the environment
- paths: Common path definitions
"""
