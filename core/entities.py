# core/entities.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

# Field widget kinds understood by core.forms.render_field
TEXT, TEXTAREA, EMAIL, TEL, NUMBER, DATE = "text", "textarea", "email", "tel", "number", "date"
CHOICE, LOOKUP, READONLY, PHOTO = "choice", "lookup", "readonly", "photo"

COURSE_STATUSES = ("Active", "Inactive", "Upcoming")
CERTIFICATE_STATUSES = ("Pending", "Generated", "Issued")
USER_ROLES = ("admin", "manager", "user")


@dataclass(frozen=True)
class Derived:
    """Fill a read-only field from the lookup record whose name matches `source`."""
    source: str                 # form field that drives the lookup
    lookup: str                 # entity key of the lookup list
    attrs: Tuple[str, ...]      # first non-empty attribute wins


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    kind: str = TEXT
    options: Tuple[str, ...] = ()
    lookup: Optional[str] = None
    default: Any = ""
    required: bool = True
    derived: Optional[Derived] = None
    optional_key: bool = False  # omitted from the empty form (photos)


@dataclass(frozen=True)
class EntitySpec:
    key: str                 # state namespace + lookup key, e.g. "course_types"
    singular: str            # "course type"
    plural: str              # "course types"
    title: str               # page heading
    resource: str            # REST collection path
    icon: str
    fields: Tuple[FieldSpec, ...]
    columns: Tuple[Tuple[str, str], ...]   # (record key, header)
    lookups: Tuple[str, ...] = ()
    new_title: str = ""
    create_label: str = ""

    @property
    def label(self) -> str:
        return self.singular.title()

    def empty_form(self) -> Dict[str, Any]:
        return {f.key: f.default for f in self.fields if not f.optional_key}

    def form_from_record(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Non-id fields of `record` in form shape."""
        form = self.empty_form()
        for f in self.fields:
            if f.key in record and record[f.key] is not None:
                form[f.key] = record[f.key]
        return form

    def form_title(self, editing: bool) -> str:
        if editing:
            return f"Edit {self.label}"
        return self.new_title or f"Add New {self.label}"

    def submit_label(self, editing: bool) -> str:
        if editing:
            return f"Update {self.label}"
        return self.create_label or f"Add {self.label}"


def find_by_name(records: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    """Linear search of a lookup list by display name."""
    if not name:
        return None
    for rec in records:
        if isinstance(rec, dict) and rec.get("name") == name:
            return rec
    return None


def missing_fields(spec: EntitySpec, form: Dict[str, Any]) -> List[str]:
    """Labels of required text fields left blank."""
    missing = []
    for f in spec.fields:
        if not f.required or f.kind in (NUMBER, READONLY, PHOTO):
            continue
        if not str(form.get(f.key) or "").strip():
            missing.append(f.label)
    return missing


def resolve_derived(derived: Derived, value: str, lookups: Dict[str, List[Dict[str, Any]]]) -> str:
    match = find_by_name(lookups.get(derived.lookup) or [], value)
    if not match:
        return ""
    for attr in derived.attrs:
        if match.get(attr):
            return match[attr]
    return ""


# ────────────────────────────────────────────────────────────────────────────────
# Registry
# ────────────────────────────────────────────────────────────────────────────────

LOCATIONS = EntitySpec(
    key="locations", singular="location", plural="locations",
    title="Location Management", resource="/api/locations", icon="📍",
    fields=(
        FieldSpec("name", "Location Name"),
        FieldSpec("address", "Address", TEXTAREA),
    ),
    columns=(("name", "Name"), ("address", "Address")),
)

CANDIDATES = EntitySpec(
    key="candidates", singular="candidate", plural="candidates",
    title="Candidate Management", resource="/api/candidates", icon="🧑‍🎓",
    fields=(
        FieldSpec("name", "Full Name"),
        FieldSpec("email", "Email", EMAIL),
        FieldSpec("phone", "Phone", TEL),
    ),
    columns=(("name", "Name"), ("email", "Email"), ("phone", "Phone")),
)

COURSE_TYPES = EntitySpec(
    key="course_types", singular="course type", plural="course types",
    title="Course Type Management", resource="/api/course-types", icon="🏷️",
    fields=(
        FieldSpec("name", "Course Type Name"),
        FieldSpec("description", "Description", TEXTAREA),
    ),
    columns=(("name", "Name"), ("description", "Description")),
)

EXPERTS = EntitySpec(
    key="experts", singular="expert", plural="experts",
    title="Expert Management", resource="/api/experts", icon="🧑‍🏫",
    fields=(
        FieldSpec("name", "Full Name"),
        FieldSpec("email", "Email", EMAIL),
        FieldSpec("specialization", "Specialization"),
    ),
    columns=(("name", "Name"), ("email", "Email"), ("specialization", "Specialization")),
)

COURSES = EntitySpec(
    key="courses", singular="course", plural="courses",
    title="Courses Management", resource="/api/courses", icon="📚",
    fields=(
        FieldSpec("name", "Course Name"),
        FieldSpec("duration", "Duration (e.g., 2 weeks, 3 months)"),
        FieldSpec("courseType", "Course Type", LOOKUP, lookup="course_types"),
        FieldSpec("expert", "Expert", LOOKUP, lookup="experts"),
        FieldSpec("status", "Status", CHOICE, options=COURSE_STATUSES),
        FieldSpec("description", "Description", TEXTAREA),
    ),
    columns=(
        ("name", "Name"), ("courseType", "Type"), ("duration", "Duration"),
        ("expert", "Expert"), ("status", "Status"),
    ),
    lookups=("course_types", "experts"),
)

ALLOTMENTS = EntitySpec(
    key="allotments", singular="allotment", plural="allotments",
    title="Course Allotment Management", resource="/api/allotments", icon="🗓️",
    fields=(
        FieldSpec("candidateName", "Candidate Name"),
        FieldSpec("courseName", "Course", LOOKUP, lookup="courses"),
        # Course records served by some backends carry "type" rather than "courseType".
        FieldSpec("courseType", "Course Type", READONLY, required=False,
                  derived=Derived(source="courseName", lookup="courses", attrs=("type", "courseType"))),
        FieldSpec("expertName", "Expert", LOOKUP, lookup="experts"),
        FieldSpec("date", "Date", DATE),
        FieldSpec("location", "Location", LOOKUP, lookup="locations"),
    ),
    columns=(
        ("candidateName", "Candidate"), ("courseName", "Course"), ("courseType", "Type"),
        ("expertName", "Expert"), ("date", "Date"), ("location", "Location"),
    ),
    lookups=("courses", "experts", "locations"),
)

EVALUATIONS = EntitySpec(
    key="evaluations", singular="evaluation", plural="evaluations",
    title="Evaluation Management", resource="/api/evaluations", icon="📝",
    fields=(
        FieldSpec("candidateName", "Candidate Name"),
        FieldSpec("courseName", "Course Name"),
        FieldSpec("courseType", "Course Type"),
        FieldSpec("location", "Location"),
        FieldSpec("duration", "Duration"),
        FieldSpec("date", "Date", DATE),
        FieldSpec("status", "Status"),
        FieldSpec("marks", "Marks", NUMBER, default=0),
        FieldSpec("remark", "Remark", TEXTAREA, required=False),
    ),
    columns=(
        ("candidateName", "Candidate"), ("courseName", "Course"), ("courseType", "Type"),
        ("location", "Location"), ("duration", "Duration"), ("date", "Date"),
        ("status", "Status"), ("marks", "Marks"),
    ),
)

USERS = EntitySpec(
    key="users", singular="user", plural="users",
    title="User Management", resource="/api/users", icon="👥",
    fields=(
        FieldSpec("username", "Username"),
        FieldSpec("email", "Email", EMAIL),
        FieldSpec("firstName", "First Name"),
        FieldSpec("lastName", "Last Name"),
        FieldSpec("candidateName", "Candidate Name"),
        FieldSpec("age", "Age", NUMBER, default=0),
        FieldSpec("departmentName", "Department Name"),
        FieldSpec("idProofNo", "ID Proof Number"),
        FieldSpec("mobileNumber", "Mobile Number", TEL),
        FieldSpec("role", "Role", CHOICE, options=USER_ROLES),
        FieldSpec("candidatePhoto", "Candidate Photo", PHOTO, required=False, optional_key=True),
        FieldSpec("idProofPhoto", "ID Proof Photo", PHOTO, required=False, optional_key=True),
    ),
    columns=(
        ("candidatePhoto", "Photo"), ("candidateName", "Name"), ("email", "Email"),
        ("role", "Role"), ("departmentName", "Department"),
    ),
)

CERTIFICATES = EntitySpec(
    key="certificates", singular="certificate", plural="certificates",
    title="Certificate Generation", resource="/api/certificates", icon="🏅",
    fields=(
        FieldSpec("candidateName", "Candidate Name"),
        FieldSpec("course", "Course"),
        FieldSpec("courseType", "Course Type"),
        FieldSpec("duration", "Duration"),
        FieldSpec("status", "Status", CHOICE, options=CERTIFICATE_STATUSES, default="Pending"),
    ),
    columns=(
        ("candidateName", "Candidate Name"), ("course", "Course"), ("courseType", "Course Type"),
        ("duration", "Duration"), ("status", "Status"),
    ),
    new_title="Generate New Certificate",
    create_label="Generate Certificate",
)

ENTITIES: Dict[str, EntitySpec] = {
    spec.key: spec
    for spec in (LOCATIONS, CANDIDATES, COURSE_TYPES, COURSES, ALLOTMENTS,
                 EXPERTS, EVALUATIONS, USERS, CERTIFICATES)
}
