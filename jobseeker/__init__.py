"""
JobSeeker Backend.

Core components:
- tools: text extraction for uploaded resumes (PDF, DOCX, DOC, TXT)
- agents: LLM resume analyzer with response validation and retry
- repositories: document store, analysis records, job listing sources
- services: resume pipeline, auth, email, background pipeline trigger
- api: FastAPI application and routes
"""
