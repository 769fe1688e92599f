from flask import Blueprint, jsonify

from schoolboard.decorators import client_error, get_store, json_payload, store_errors
from schoolboard.models import Teacher
from schoolboard.store import TEACHERS

bp = Blueprint('auth', __name__, url_prefix='/api')


@bp.route('/register', methods=['POST'])
@store_errors('Failed to register teacher due to a server error.')
def register():
    data = json_payload()
    name = data.get('name')
    email = data.get('email')
    password = data.get('password')
    if not name or not email or not password:
        return client_error('Fill all fields')

    store = get_store()
    if store.find_one(TEACHERS, 'email', email):
        return client_error('Email already exists')

    store.insert(TEACHERS, Teacher(name=name, email=email, password=password).to_dict())
    return jsonify({'message': 'Teacher registered!'})


@bp.route('/login', methods=['POST'])
@store_errors('Failed to log in due to a server error.')
def login():
    data = json_payload()
    email = data.get('email')
    password = data.get('password')
    if not email or not password:
        return client_error('Invalid credentials')

    record = get_store().find_one(TEACHERS, 'email', email)
    # Same answer for unknown email and wrong password.
    if not record:
        return client_error('Invalid credentials')

    teacher = Teacher.from_dict(record)
    if teacher.password != password:
        return client_error('Invalid credentials')

    return jsonify({'user': teacher.public_dict()})
