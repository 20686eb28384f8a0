"""
Memberships App for FreelanceHub.

Freelancer membership plans (Basic, Premium, Pro): monthly bid allowance,
profile perks and the platform commission rate.
"""
