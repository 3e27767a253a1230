from flask import current_app


def get_services():
    """Services wired by create_app for the current application"""
    return current_app.extensions['police_id']
