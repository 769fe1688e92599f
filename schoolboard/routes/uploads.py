from flask import Blueprint, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from schoolboard.decorators import client_error, file_too_large, get_resolver, get_store, store_errors
from schoolboard.filters import filter_student_view
from schoolboard.models import ALL, Upload
from schoolboard.services.storage import UPLOAD_PREFIX
from schoolboard.store import UPLOADS

bp = Blueprint('uploads', __name__, url_prefix='/api')
bp.register_error_handler(RequestEntityTooLarge, file_too_large)


@bp.route('/upload', methods=['POST'])
@store_errors('Failed to save file metadata to database.')
def upload_file():
    file = request.files.get('file')
    teacher_id = request.form.get('teacherId')
    if not file or not file.filename or not teacher_id:
        return client_error('File and teacherId required')

    # A failed storage upload still yields a placeholder URL.
    file_url = get_resolver().resolve(file.read(), file.filename, file.mimetype, UPLOAD_PREFIX)

    upload = Upload(
        teacherId=str(teacher_id),
        filename=file_url,
        originalName=file.filename,
        grade=str(request.form.get('grade') or ALL),
        classLetter=str(request.form.get('classLetter') or ALL),
    )
    get_store().insert(UPLOADS, upload.to_dict())
    return jsonify({'message': 'File uploaded successfully!'})


@bp.route('/uploads', methods=['GET'])
@store_errors('Failed to fetch uploads.')
def list_uploads():
    teacher_id = request.args.get('teacherId')
    files = [f for f in get_store().list(UPLOADS)
             if not teacher_id or f.get('teacherId') == teacher_id]
    return jsonify({'files': files})


@bp.route('/uploads/student', methods=['GET'])
@store_errors('Failed to fetch uploads.')
def student_uploads():
    grade = request.args.get('grade')
    class_letter = request.args.get('classLetter')
    files = filter_student_view(get_store().list(UPLOADS), grade, class_letter)
    return jsonify({'files': files})


@bp.route('/upload/<upload_id>', methods=['DELETE'])
@store_errors('Failed to delete upload due to a server error.')
def delete_upload(upload_id):
    store = get_store()
    record = store.get(UPLOADS, upload_id)
    if record:
        get_resolver().release(Upload.from_dict(record).filename)

    store.delete(UPLOADS, upload_id)
    return jsonify({'message': 'File and metadata deleted successfully!'})
