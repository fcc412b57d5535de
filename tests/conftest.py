import pytest

PARSED_AT = "2024-08-01T00:00:00Z"

SAMPLE_CATALOG = """VANDERBILT UNIVERSITY
Undergraduate Catalog 2024-25

School of Engineering course listings follow.

CS 1101 - Programming and Problem Solving
Course Description
Introduction to programming. FALL, SPRING, SUMMER. [3]
CS 2201 - Data Structures
Course Description
Abstract data types. Prerequisite: CS 1101 or CS 1104. FALL, SPRING. [3]
CS 3250 - Algorithms
Course Description
Study of algorithms. Prerequisite: CS 2201, CS 2212. FALL, SPRING. [3]
MATH 2410 - Methods of Linear Algebra
Course Description
Matrices and vector spaces. Prerequisite: junior standing. SPRING. [3]
CS 3251 - Intermediate Software Design
Course Description
Design patterns. Prereqs: CS 2201. FALL. [3]
"""

DUPLICATE_CATALOG = """CS 3250 - Algorithms
Course Description
Study of algorithms. Prerequisite: CS 2201, CS 2212. FALL, SPRING. [3]
CS 2201 - Data Structures
Course Description
Abstract data types. Prerequisite: CS 1101. FALL. [3]
CS 3250 - Algorithms II
Course Description
Advanced algorithms. Prerequisite: CS 2201. SPRING. [4]
"""


@pytest.fixture
def sample_catalog():
    return SAMPLE_CATALOG


@pytest.fixture
def duplicate_catalog():
    return DUPLICATE_CATALOG


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.txt"
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path
