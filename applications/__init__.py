"""
Applications App for FreelanceHub.

Freelancer applications to projects: submission with attachments, review
by the project owner and attachment download.
"""
