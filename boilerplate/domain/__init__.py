"""Domain rules with no framework or database dependency.

Roles, reset-token validity and the pagination/sort helpers live here so the
service, repository and API layers share one definition of each rule.
"""
