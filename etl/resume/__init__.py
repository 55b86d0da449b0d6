"""
Resume Extraction Module - text extraction for uploaded resumes.
"""
from etl.resume.parser import ResumeParser, ParsedResume, build_parsed_data

__all__ = [
    'ResumeParser',
    'ParsedResume',
    'build_parsed_data',
]
