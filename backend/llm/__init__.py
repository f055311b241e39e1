"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Explain why quiz recommendations fit the user's answers.
- Draft blog posts for the admin panel.
- Graceful fallback when the LLM is unavailable or returns invalid output.
"""
