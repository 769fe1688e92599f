from flask import Blueprint, jsonify, request

from schoolboard.decorators import client_error, get_store, json_payload, store_errors
from schoolboard.filters import filter_student_view
from schoolboard.models import Task, TeacherRef
from schoolboard.store import TASKS

bp = Blueprint('tasks', __name__, url_prefix='/api')


@bp.route('/task', methods=['POST'])
@store_errors('Failed to add task due to a server error.')
def create_task():
    data = json_payload()
    teacher = TeacherRef.from_payload(data.get('teacher'))
    required = ('grade', 'classLetter', 'subject', 'description', 'dueDate')
    if any(not data.get(key) for key in required) or not teacher or not teacher.name:
        return client_error('Missing task details or teacher info')

    task = Task(
        grade=str(data['grade']),
        classLetter=str(data['classLetter']),
        subject=data['subject'],
        description=data['description'],
        dueDate=data['dueDate'],
        teacher=teacher,
    )
    get_store().insert(TASKS, task.to_dict())
    return jsonify({'message': 'Task added!'})


@bp.route('/tasks', methods=['GET'])
@store_errors('Failed to fetch tasks.')
def list_tasks():
    return jsonify(get_store().list(TASKS))


@bp.route('/tasks/student', methods=['GET'])
@store_errors('Failed to fetch tasks.')
def student_tasks():
    grade = request.args.get('grade')
    class_letter = request.args.get('classLetter')
    return jsonify(filter_student_view(get_store().list(TASKS), grade, class_letter))


@bp.route('/task/<task_id>/done', methods=['PUT'])
@store_errors('Failed to update task status.')
def toggle_task_done(task_id):
    store = get_store()
    record = store.get(TASKS, task_id)
    if not record:
        return client_error('Task not found')

    # Not atomic: two concurrent toggles can both read the same state.
    done = not Task.from_dict(record).done
    store.update(TASKS, task_id, {'done': done})
    return jsonify({'message': 'Task updated!', 'done': done})


@bp.route('/task/<task_id>', methods=['DELETE'])
@store_errors('Failed to delete task due to a server error.')
def delete_task(task_id):
    get_store().delete(TASKS, task_id)
    return jsonify({'message': 'Task deleted successfully!'})
