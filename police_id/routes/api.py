"""
JSON API for registration, lookup, search, scan logging and the dashboard
"""

from flask import Blueprint, Response, current_app, jsonify, request

from police_id.errors import InvalidArgument, NotFound
from police_id.qr import DEFAULT_QR_SIZE, MIN_QR_SIZE, MAX_QR_SIZE, build_verification_url, generate_qr_png
from police_id.routes import get_services

api_bp = Blueprint('api', __name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data(cache=True):
            raise InvalidArgument('Request body must be valid JSON')
        return {}
    if not isinstance(data, dict):
        raise InvalidArgument('Request body must be a JSON object')
    return data


@api_bp.route('/members', methods=['POST'])
def create_member():
    """Register an officer; the ID number is assigned by the store"""
    member_id, id_number = get_services()['members'].create(_json_body())
    current_app.logger.info(f"Member registered: {id_number}")
    return jsonify({'id': member_id, 'id_number': id_number})


@api_bp.route('/members/search')
def search_members():
    query = request.args.get('query', '')
    members = get_services()['members'].search(query)
    return jsonify([member.to_dict() for member in members])


@api_bp.route('/members')
def list_members():
    """Admin directory, sorted by name"""
    members = get_services()['members'].list_all()
    return jsonify([member.to_dict() for member in members])


@api_bp.route('/members/<id_number>')
def get_member(id_number):
    try:
        member = get_services()['members'].get_by_id_number(id_number)
    except NotFound:
        current_app.logger.warning(f"Lookup for unknown ID {id_number}")
        raise
    return jsonify(member.to_dict())


@api_bp.route('/members/<id_number>/qr')
def member_qr(id_number):
    """PNG QR code pointing at the public verification page"""
    raw_size = request.args.get('size')
    try:
        size = int(raw_size) if raw_size is not None else DEFAULT_QR_SIZE
    except ValueError:
        raise InvalidArgument('size must be an integer')
    if not MIN_QR_SIZE <= size <= MAX_QR_SIZE:
        raise InvalidArgument(f'size must be between {MIN_QR_SIZE} and {MAX_QR_SIZE}')

    member = get_services()['members'].get_by_id_number(id_number)
    png = generate_qr_png(build_verification_url(member.id_number), size=size)
    return Response(png, mimetype='image/png')


@api_bp.route('/verify/<id_number>', methods=['GET', 'POST'])
def verify_member(id_number):
    """Exact ID check; every successful check is recorded as a scan"""
    scanner_info = request.args.get('scanner_info') or _json_body().get('scanner_info') or 'Web Verification'
    try:
        member = get_services()['scans'].verify(id_number, scanner_info)
    except NotFound:
        current_app.logger.warning(f"Verification failed for unknown ID {id_number}")
        raise
    return jsonify({'verified': True, 'member': member.to_dict()})


@api_bp.route('/scan', methods=['POST'])
def record_scan():
    data = _json_body()
    try:
        get_services()['scans'].record_scan(data.get('id_number'), data.get('scanner_info'))
    except NotFound:
        current_app.logger.warning(f"Scan for unknown ID {data.get('id_number')}")
        raise
    return jsonify({'success': True})


@api_bp.route('/stats')
def stats():
    return jsonify(get_services()['stats'].get_stats())
