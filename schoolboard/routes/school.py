from flask import Blueprint, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from schoolboard.decorators import (client_error, file_too_large, get_resolver,
                                    get_store, json_payload, store_errors)
from schoolboard.services.storage import LOGO_PREFIX
from schoolboard.store import TEACHERS

bp = Blueprint('school', __name__, url_prefix='/api')
bp.register_error_handler(RequestEntityTooLarge, file_too_large)


@bp.route('/school-info', methods=['GET'])
@store_errors('Failed to fetch school data')
def school_info():
    return jsonify(get_store().get_settings())


@bp.route('/admin/update-school-info', methods=['PATCH'])
@store_errors('Failed to update school data')
def update_school_info():
    school_name = request.form.get('schoolName') or json_payload().get('schoolName')
    updates = {}

    if school_name:
        updates['schoolName'] = school_name

    logo = request.files.get('schoolLogo')
    if logo and logo.filename:
        updates['schoolLogo'] = get_resolver().resolve(
            logo.read(), logo.filename, logo.mimetype, LOGO_PREFIX)

    school = get_store().update_settings(updates)
    return jsonify({'message': 'School info updated', 'school': school})


@bp.route('/admin/reset-teacher-password', methods=['POST'])
@store_errors('Failed to reset password due to a server error.')
def reset_teacher_password():
    data = json_payload()
    email = data.get('email')
    new_password = data.get('newPassword')

    if not email or not new_password:
        return client_error('Email and new password required')

    store = get_store()
    teacher = store.find_one(TEACHERS, 'email', email)
    if not teacher:
        return client_error('Teacher not found')

    # Read-then-write; concurrent resets race and the last write wins.
    store.update(TEACHERS, teacher['id'], {'password': new_password})
    return jsonify({'message': f'Password for {email} reset successfully!'})
