"""Command line interface for shipwright"""
