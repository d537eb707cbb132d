"""
Teleidoscope Backend Package.

Contains the asm.js-style JavaScript code generator.

Author: xwest
"""

from .asmjs_backend import AsmJSBackend, format_number, generate_string

__all__ = ['AsmJSBackend', 'format_number', 'generate_string']
