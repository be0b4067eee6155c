"""Operator-facing interfaces for adconnect."""
