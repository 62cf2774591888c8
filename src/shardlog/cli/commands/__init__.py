"""Subcommands registered on the shardlog CLI app."""
