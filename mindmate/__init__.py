"""
MindMate: a supportive chat front end for a hosted conversational agent.
"""

__version__ = "0.1.0"
