from flask import Blueprint, jsonify, request

from schoolboard.decorators import client_error, get_store, json_payload, store_errors
from schoolboard.filters import filter_student_view
from schoolboard.models import Announcement, TeacherRef
from schoolboard.store import ANNOUNCEMENTS

bp = Blueprint('announcements', __name__, url_prefix='/api')


@bp.route('/announcement', methods=['POST'])
@store_errors('Failed to add announcement due to a server error.')
def create_announcement():
    data = json_payload()
    teacher = TeacherRef.from_payload(data.get('teacher'))
    if not data.get('grade') or not data.get('classLetter') or not data.get('message') or not teacher:
        return client_error('Missing announcement info')

    announcement = Announcement(
        grade=str(data['grade']),
        classLetter=str(data['classLetter']),
        message=data['message'],
        teacher=teacher,
    )
    get_store().insert(ANNOUNCEMENTS, announcement.to_dict())
    return jsonify({'message': 'Announcement added!'})


@bp.route('/announcements', methods=['GET'])
@store_errors('Failed to fetch announcements.')
def list_announcements():
    return jsonify(get_store().list(ANNOUNCEMENTS))


@bp.route('/announcements/student', methods=['GET'])
@store_errors('Failed to fetch announcements.')
def student_announcements():
    grade = request.args.get('grade')
    class_letter = request.args.get('classLetter')
    return jsonify(filter_student_view(get_store().list(ANNOUNCEMENTS), grade, class_letter))


@bp.route('/announcement/<announcement_id>', methods=['DELETE'])
@store_errors('Failed to delete announcement due to a server error.')
def delete_announcement(announcement_id):
    get_store().delete(ANNOUNCEMENTS, announcement_id)
    return jsonify({'message': 'Announcement deleted successfully!'})
