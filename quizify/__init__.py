"""
Quizify AI

A FastAPI service that turns content into quizzes:
- Text, PDF and URL content extraction
- Gemini-powered summaries
- Multiple-choice and True/False quiz generation with scoring
"""

__version__ = "1.0.0"
