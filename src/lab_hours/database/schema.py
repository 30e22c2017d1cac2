from ..extensions import db


class StudentRow(db.Model):
    __tablename__ = 'students'

    # External id assigned by the members service
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)

    lab_sessions = db.relationship('LabSessionRow', backref='student', lazy=True, order_by='LabSessionRow.id')


class MentorRow(db.Model):
    __tablename__ = 'mentors'

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone_number = db.Column(db.String(10), nullable=False, index=True)  # last 10 digits only


class LabSessionRow(db.Model):
    __tablename__ = 'lab_sessions'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False, index=True)
    time_in = db.Column(db.DateTime, nullable=False)
    time_out = db.Column(db.DateTime)  # NULL while the session is open
    notes = db.Column(db.Text)

    # Set only for mentor-attributed sign-outs
    mentor_name = db.Column(db.String(200))
    mentor_id = db.Column(db.Integer, db.ForeignKey('mentors.id', ondelete='SET NULL'))
    mentor = db.relationship('MentorRow')


class TagRow(db.Model):
    __tablename__ = 'tags'

    id = db.Column(db.Integer, primary_key=True)
    tag_id = db.Column(db.String(64), unique=True, nullable=False)

    # Exactly one of these is set for an assigned tag
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'))
    mentor_id = db.Column(db.Integer, db.ForeignKey('mentors.id'))
