"""
Interactive shell: session state and the commands the user can run.
"""
