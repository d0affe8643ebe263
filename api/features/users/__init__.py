"""Users feature package: the member directory that messaging resolves
senders, receivers and conversation contacts against.
"""
