"""Legal consultation backend.

Consolidated documents (metadata, node tree, configuration), comments on
document nodes, and transactional email for registration and document
assignment.
"""
