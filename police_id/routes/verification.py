"""
Public verification page for officer ID cards.
The QR code on every card points here.
"""

from flask import Blueprint, current_app, render_template, request

from police_id.errors import NotFound
from police_id.routes import get_services

verification_bp = Blueprint('verification', __name__)


@verification_bp.route('/verify/<id_number>')
def verify_id(id_number):
    """
    Anyone can scan the QR code and confirm the officer is registered.
    Successful checks are logged as scans.
    """
    scanner_info = request.headers.get('User-Agent') or 'QR Scan'
    try:
        member = get_services()['scans'].verify(id_number, f'QR Scan: {scanner_info}')
    except NotFound:
        current_app.logger.warning(f"QR verification for unknown ID {id_number}")
        return render_template('verification.html', valid=False, id_number=id_number), 404

    return render_template('verification.html', valid=True, member=member, id_number=id_number)
