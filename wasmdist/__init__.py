"""Bundle a browser-targeted WebAssembly build with its static web assets."""

__version__ = '0.1.0'
