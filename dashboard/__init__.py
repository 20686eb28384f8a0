"""
Dashboard App for FreelanceHub.

Aggregated overviews for clients (their projects and the applications
received) and freelancers (their applications, saved projects and
membership).
"""
