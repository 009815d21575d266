"""
textcomplete package.

Provides:
- A one-shot CLI that sends a prompt to an OpenAI-compatible completions endpoint
- Settings loading from YAML and environment
"""
