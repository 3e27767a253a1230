from police_id import db

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

REQUIRED_FIELDS = ('full_name', 'rank', 'responsibility', 'phone_number')
IMAGE_FIELDS = ('photo_url', 'left_flag_url', 'center_logo_url', 'right_flag_url')


def _format_timestamp(value):
    return value.strftime(TIMESTAMP_FORMAT) if value else None


class Member(db.Model):
    __tablename__ = 'members'
    # AUTOINCREMENT keeps surrogate keys (and so ID numbers) from being reused
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    id_number = db.Column(db.String(32), unique=True)  # Format: BGR-POL-XXXX
    full_name = db.Column(db.Text, nullable=False)
    rank = db.Column(db.Text, nullable=False)
    responsibility = db.Column(db.Text, nullable=False)
    phone_number = db.Column(db.Text, nullable=False)

    # Card images, data URIs or external URLs
    photo_url = db.Column(db.Text)
    left_flag_url = db.Column(db.Text)
    center_logo_url = db.Column(db.Text)
    right_flag_url = db.Column(db.Text)

    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    scans = db.relationship('ScanLog', backref='member', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'id_number': self.id_number,
            'full_name': self.full_name,
            'rank': self.rank,
            'responsibility': self.responsibility,
            'phone_number': self.phone_number,
            'photo_url': self.photo_url,
            'left_flag_url': self.left_flag_url,
            'center_logo_url': self.center_logo_url,
            'right_flag_url': self.right_flag_url,
            'created_at': _format_timestamp(self.created_at),
        }

    def __repr__(self):
        return f'<Member {self.id_number}>'


class ScanLog(db.Model):
    __tablename__ = 'scans'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey('members.id'))
    scan_time = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    scanner_info = db.Column(db.Text)

    def to_dict(self):
        return {
            'id': self.id,
            'member_id': self.member_id,
            'scan_time': _format_timestamp(self.scan_time),
            'scanner_info': self.scanner_info,
        }

    def __repr__(self):
        return f'<ScanLog {self.id} member={self.member_id}>'
