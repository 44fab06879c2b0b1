"""Shared configuration, logging and parsing helpers."""
