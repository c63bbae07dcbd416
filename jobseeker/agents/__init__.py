"""
Agents for JobSeeker.

- resume_analyzer: structured resume analysis via the chat model
"""

from jobseeker.agents.resume_analyzer import ResumeAnalyzer, create_chat_model

__all__ = ["ResumeAnalyzer", "create_chat_model"]
