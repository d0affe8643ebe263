"""Messages feature package: private messages between users, the derived
conversation list, threads, and read state.
"""
