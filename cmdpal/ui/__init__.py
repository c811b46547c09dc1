"""UI package for cmdpal terminal user interfaces.

Components are built on the Textual framework:

- command_palette: the palette engine and its modal screen
- demo_app: a small host application wiring the palette to sample data
"""
