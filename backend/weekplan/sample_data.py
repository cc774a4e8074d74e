"""IT department seed data used by the demo script and the test-suite."""

from __future__ import annotations

from weekplan.schemas.generator import FillerActivity, GenerateTimetableRequest

FACULTY = [
    {"id": "f1", "name": "MS. MIZNA", "email": "mizna@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 18},
    {"id": "f2", "name": "MRS. Y. SIRISHA", "email": "sirisha@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 15},
    {"id": "f3", "name": "DR. M. KRISHNA", "email": "krishna@matrusri.edu.in", "designation": "Professor", "department": "IT", "weeklyLoad": 12},
    {"id": "f4", "name": "MRS. M. SRIVIDYA", "email": "srividya@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 15},
    {"id": "f5", "name": "MS. J. NAGALAXMI", "email": "nagalaxmi@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 14},
    {"id": "f6", "name": "MRS. STVSAV. RAMYA", "email": "ramya@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 16},
    {"id": "f7", "name": "MRS. S. NAGAJYOTHI", "email": "nagajyothi@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 14},
    {"id": "f8", "name": "MRS. T. ARUNA JYOTHI", "email": "arunajyothi@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 12},
    {"id": "f9", "name": "DR. J. SRINIVAS", "email": "srinivas@matrusri.edu.in", "designation": "Professor", "department": "IT", "weeklyLoad": 10},
    {"id": "f10", "name": "MRS. K. MOUNIKA", "email": "mounika@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 14},
    {"id": "f11", "name": "MR. A. RAJESH", "email": "rajesh@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 12},
    {"id": "f12", "name": "MS. T. VIJAYA LAXMI", "email": "vijayalaxmi@matrusri.edu.in", "designation": "Asst. Professor", "department": "IT", "weeklyLoad": 12},
    {"id": "f13", "name": "MR. K. RAVI", "designation": "Librarian", "department": "Library", "weeklyLoad": 60},
    {"id": "f14", "name": "MR. P. SURESH", "designation": "Physical Director", "department": "Sports", "weeklyLoad": 30},
]

ROOMS = [
    {"id": "r1", "name": "N 305", "type": "Theory", "capacity": 60},
    {"id": "r2", "name": "N 313", "type": "Theory", "capacity": 60},
    {"id": "r3", "name": "N 314", "type": "Theory", "capacity": 60},
    {"id": "r4", "name": "N 304", "type": "Theory", "capacity": 60},
    {"id": "r5", "name": "IT LAB 1", "type": "Lab", "capacity": 35},
    {"id": "r6", "name": "IT LAB 2", "type": "Lab", "capacity": 35},
    {"id": "r7", "name": "CENTRAL LIBRARY", "type": "Theory", "capacity": 200},
    {"id": "r8", "name": "PLAY GROUND", "type": "Theory", "capacity": 500},
]

SECTIONS = [
    {"id": "s1", "year": 4, "semester": 7, "name": "A", "classTeacherId": "f6", "defaultRoomId": "r1", "wefDate": "22/09/2025", "strength": 60},
    {"id": "s2", "year": 3, "semester": 5, "name": "B", "classTeacherId": "f7", "defaultRoomId": "r2", "wefDate": "22/09/2025", "strength": 62},
    {"id": "s3", "year": 3, "semester": 5, "name": "A", "classTeacherId": "f11", "defaultRoomId": "r3", "wefDate": "22/09/2025", "strength": 58},
]

SUBJECTS = [
    {"id": "sub1", "code": "PC701IT", "name": "Internet of Things", "abbreviation": "IOT", "type": "Theory", "year": 4, "semester": 7, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f1"},
    {"id": "sub2", "code": "PC702IT", "name": "Big Data Analytics", "abbreviation": "BDA", "type": "Theory", "year": 4, "semester": 7, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f2"},
    {"id": "sub3", "code": "OE704ME", "name": "Entrepreneurship", "abbreviation": "ENT", "type": "Theory", "year": 4, "semester": 7, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f3"},
    {"id": "sub4", "code": "PE 734 IT", "name": "Natural Language Processing", "abbreviation": "NLP", "type": "Theory", "year": 4, "semester": 7, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f4"},
    {"id": "sub5", "code": "PE 741 IT", "name": "Software Project Management", "abbreviation": "SPM", "type": "Theory", "year": 4, "semester": 7, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f5"},
    {"id": "sub6", "code": "PC751IT", "name": "Internet of Things Lab", "abbreviation": "IOT LAB", "type": "Lab", "year": 4, "semester": 7, "section": "A", "periodsPerWeek": 2, "assignedFacultyId": "f1"},
    {"id": "sub7", "code": "PC501IT", "name": "Computer Networks", "abbreviation": "CN", "type": "Theory", "year": 3, "semester": 5, "section": "ALL", "periodsPerWeek": 4, "assignedFacultyId": "f7"},
    {"id": "sub8", "code": "PC502IT", "name": "Web Technologies", "abbreviation": "WT", "type": "Theory", "year": 3, "semester": 5, "section": "B", "periodsPerWeek": 3, "assignedFacultyId": "f8"},
    {"id": "sub9", "code": "PC503IT", "name": "Automata Theory", "abbreviation": "AT", "type": "Theory", "year": 3, "semester": 5, "section": "B", "periodsPerWeek": 3, "assignedFacultyId": "f9"},
    {"id": "sub10", "code": "PC502IT", "name": "Web Technologies", "abbreviation": "WT", "type": "Theory", "year": 3, "semester": 5, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f10"},
    {"id": "sub11", "code": "PC503IT", "name": "Automata Theory", "abbreviation": "AT", "type": "Theory", "year": 3, "semester": 5, "section": "A", "periodsPerWeek": 3, "assignedFacultyId": "f11"},
    {"id": "sub12", "code": "PC551IT", "name": "Computer Networks Lab", "abbreviation": "CN LAB", "type": "Lab", "year": 3, "semester": 5, "section": "B", "periodsPerWeek": 2, "assignedFacultyId": "f12"},
    {"id": "sub13", "code": "PC552IT", "name": "Web Technologies Lab", "abbreviation": "WT LAB", "type": "Lab", "year": 3, "semester": 5, "section": "B", "periodsPerWeek": 2, "assignedFacultyId": "f8"},
    {"id": "sub14", "code": "PC551IT", "name": "Computer Networks Lab", "abbreviation": "CN LAB", "type": "Lab", "year": 3, "semester": 5, "section": "A", "periodsPerWeek": 2, "assignedFacultyId": "f6"},
    {"id": "sub15", "code": "PC552IT", "name": "Web Technologies Lab", "abbreviation": "WT LAB", "type": "Lab", "year": 3, "semester": 5, "section": "A", "periodsPerWeek": 2, "assignedFacultyId": "f10"},
    {"id": "lib", "code": "LIB", "name": "Library", "abbreviation": "LIB", "type": "Theory", "year": 1, "semester": 1, "section": "ALL", "periodsPerWeek": 0, "assignedFacultyId": "f13"},
    {"id": "sports", "code": "SPORTS", "name": "Sports", "abbreviation": "SPORTS", "type": "Theory", "year": 1, "semester": 1, "section": "ALL", "periodsPerWeek": 0, "assignedFacultyId": "f14"},
]


def sample_request() -> GenerateTimetableRequest:
    return GenerateTimetableRequest(
        faculty=FACULTY,
        rooms=ROOMS,
        subjects=SUBJECTS,
        sections=SECTIONS,
        library=FillerActivity(subject_id="lib", room_id="r7"),
        sports=FillerActivity(subject_id="sports", room_id="r8"),
    )
