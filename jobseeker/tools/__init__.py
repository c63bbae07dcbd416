"""
Tools for the JobSeeker backend.

- text_extractor: Extract text from PDF, DOCX, DOC and TXT resumes
"""

from jobseeker.tools.text_extractor import extract_text, extract_text_from_path

__all__ = ["extract_text", "extract_text_from_path"]
