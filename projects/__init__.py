"""
Projects App for FreelanceHub.

Client-posted projects, the open project feed, engagement and the
activity log.
"""
