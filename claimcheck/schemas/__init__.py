"""Structured request/response models for the tool boundary."""
