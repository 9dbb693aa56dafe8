"""
Lesson extraction from calendar documents.
"""

from .aggregator import remove_duplicates_with_count
from .data_mapping import get_subject_name, get_teacher_name
from .parser import extract_classes, filter_events_by_date, format_date, get_weekday
from .service import LessonService, build_lesson_rows, detect_class, process_events
