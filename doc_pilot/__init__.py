"""doc-pilot.

An LLM-powered terminal tool that explains how to use a library
function, using the Google Gemini API.
"""

__version__ = "1.0.0"
