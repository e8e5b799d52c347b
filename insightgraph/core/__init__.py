"""
Core module - Business logic for InsightGraph

This module contains the core functionality organized by domain:
- analysis: tokenizing, keyword scoring, co-occurrence, quality, insights
- layout: force-directed layout of the concept graph
- export / file_loaders: getting text in and results out
"""
