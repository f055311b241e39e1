"""
CAD software quiz.

Responsibilities:
- Define the quiz questions and their option values.
- Step through answers with a pure state reducer.
- Finalize answers into a quiz result used for recommendation scoring.
- Capture optional email subscriptions after a finished quiz.
"""
