"""
Data access for officer records: registration, lookup, search,
scan logging and dashboard counts.

The services take the session explicitly so an app (or a test) can
build them against its own database.
"""

import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from police_id.errors import InvalidArgument, NotFound, StoreError
from police_id.id_numbers import format_id_number
from police_id.models import Member, ScanLog, REQUIRED_FIELDS, IMAGE_FIELDS

logger = logging.getLogger(__name__)


def _driver_message(exc):
    return str(getattr(exc, 'orig', None) or exc)


class MemberRepository:
    def __init__(self, session, prefix='BGR-POL'):
        self.session = session
        self.prefix = prefix

    def _clean_fields(self, fields):
        if not isinstance(fields, dict):
            raise InvalidArgument('Member fields must be a JSON object')

        data = {}
        for name in REQUIRED_FIELDS:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise InvalidArgument(f'{name} is required')
            if not isinstance(value, str):
                raise InvalidArgument(f'{name} must be a string')
            data[name] = value

        for name in IMAGE_FIELDS:
            value = fields.get(name)
            if value is not None and not isinstance(value, str):
                raise InvalidArgument(f'{name} must be a string')
            data[name] = value or None

        return data

    def create(self, fields):
        """
        Insert a member and assign its ID number.

        The number comes from the key the store assigns to the new row,
        set before the single commit, so two registrations can never
        derive the same sequence.

        Returns:
            tuple: (id, id_number)
        """
        data = self._clean_fields(fields)
        member = Member(**data)
        try:
            self.session.add(member)
            self.session.flush()
            member.id_number = format_id_number(self.prefix, member.id)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception('Failed to register member %s', data['full_name'])
            raise StoreError(_driver_message(exc)) from exc

        logger.info('Registered member %s (%s)', member.id_number, member.full_name)
        return member.id, member.id_number

    def get_by_id_number(self, id_number):
        try:
            member = self.session.query(Member).filter_by(id_number=id_number).first()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(_driver_message(exc)) from exc
        if member is None:
            raise NotFound('Member not found')
        return member

    def list_all(self):
        try:
            return (
                self.session.query(Member)
                .order_by(func.lower(Member.full_name).asc(), Member.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(_driver_message(exc)) from exc

    def search(self, query):
        """Substring match on ID number, name or phone. Wildcards in the query are literal."""
        if not query:
            raise InvalidArgument('Query is required')

        try:
            return (
                self.session.query(Member)
                .filter(or_(
                    Member.id_number.contains(query, autoescape=True),
                    Member.full_name.contains(query, autoescape=True),
                    Member.phone_number.contains(query, autoescape=True),
                ))
                .order_by(Member.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(_driver_message(exc)) from exc


class ScanLogger:
    def __init__(self, session, members):
        self.session = session
        self.members = members

    def record_scan(self, id_number, scanner_info=None):
        """Append a scan for the member; NotFound leaves the log untouched"""
        if not id_number:
            raise InvalidArgument('id_number is required')

        member = self.members.get_by_id_number(id_number)
        scan = ScanLog(member_id=member.id, scanner_info=scanner_info)
        try:
            self.session.add(scan)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception('Failed to log scan for %s', id_number)
            raise StoreError(_driver_message(exc)) from exc

        logger.info('Scan logged for %s by %s', id_number, scanner_info)
        return scan

    def verify(self, id_number, scanner_info=None):
        """Exact lookup for an ID card check. Every successful check is logged."""
        return self.record_scan(id_number, scanner_info).member


class StatsAggregator:
    def __init__(self, session):
        self.session = session

    def get_stats(self):
        return {
            'totalMembers': self.session.query(func.count(Member.id)).scalar(),
            'totalScans': self.session.query(func.count(ScanLog.id)).scalar(),
        }
