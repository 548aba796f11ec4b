"""Core components for docucache."""
