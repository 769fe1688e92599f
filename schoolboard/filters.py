from schoolboard.models import ALL


def matches_student_view(record, grade, class_letter):
    """True if a task/announcement/upload is visible to a student in the
    given grade and class.

    ``'all'`` on the record matches any grade or class. Grades compare as
    exact strings; class letters compare case-insensitively.
    """
    record_grade = record.get('grade')
    record_class = record.get('classLetter') or ''

    grade_ok = record_grade == grade or record_grade == ALL
    class_ok = (record_class.upper() == (class_letter or '').upper()
                or record_class == ALL)
    return grade_ok and class_ok


def filter_student_view(records, grade, class_letter):
    return [r for r in records if matches_student_view(r, grade, class_letter)]
