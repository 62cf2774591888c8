"""Adapters implementing shardlog ports."""
