from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    store = container.store
    queries = container.queries

    @app.route("/api/courses", methods=["GET"], endpoint="list_courses")
    def list_courses():
        lecturer_id = request.args.get("lecturer_id")
        student_id = request.args.get("student_id")
        if lecturer_id:
            courses = queries.courses_by_lecturer(lecturer_id)
        elif student_id:
            courses = queries.courses_by_student(student_id)
        else:
            courses = list(store.courses)
        return jsonify([to_json(c) for c in courses])

    @app.route("/api/courses/<course_id>", methods=["GET"], endpoint="get_course")
    def get_course(course_id: str):
        course = queries.course_by_id(course_id)
        if not course:
            raise NotFoundError("Course not found")
        return jsonify(to_json(course))

    @app.route("/api/courses/<course_id>/enrollments", methods=["POST"], endpoint="enroll_student")
    def enroll_student(course_id: str):
        data = request.get_json(silent=True) or {}
        student_id = require_non_empty(data.get("student_id"), "student_id")
        if not store.enroll_student(student_id, course_id):
            raise NotFoundError("Student or course not found")
        return jsonify(to_json(store.get_course(course_id)))

    @app.route(
        "/api/courses/<course_id>/enrollments/<student_id>",
        methods=["DELETE"],
        endpoint="unenroll_student",
    )
    def unenroll_student(course_id: str, student_id: str):
        if not store.unenroll_student(student_id, course_id):
            raise NotFoundError("Student or course not found")
        return jsonify(to_json(store.get_course(course_id)))

    @app.route("/api/courses/<course_id>", methods=["DELETE"], endpoint="delete_course")
    def delete_course(course_id: str):
        store.remove_course(course_id)
        return jsonify({"success": True})
