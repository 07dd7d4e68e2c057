"""Shared utilities: logging and cross-cutting helpers. No business logic."""
