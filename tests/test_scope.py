import pytest

from jointable.exceptions import ReadOnlyRecord, RecordNotFound

from .models import Project


def test_scope_refinements_are_new_scopes(developer):
    scope = developer.projects.scoped()
    readonly = scope.readonly()

    assert readonly is not scope
    assert readonly.is_readonly
    assert not scope.is_readonly
    assert not readonly.readonly(False).is_readonly


def test_first_and_count(developer, projects):
    developer.projects.append(*projects[:2])
    scope = developer.projects.scoped()

    assert scope.count() == 2
    assert scope.first() in projects[:2]
    assert scope.where(Project.name == "Notes").first() is None


def test_find_several(developer, projects):
    developer.projects.append(*projects)
    found = developer.projects.find(projects[0].id, projects[2].id)

    assert sorted(found, key=lambda p: p.id) == [projects[0], projects[2]]


def test_find_all(developer, projects):
    developer.projects.append(*projects[:2])
    assert len(developer.projects.find()) == 2


def test_find_with_criteria(developer, projects):
    developer.projects.append(*projects)
    found = developer.projects.find(where=[Project.access_level == "read"])

    assert found == [projects[1]]


def test_find_outside_association(developer, projects):
    developer.projects.append(projects[0])

    with pytest.raises(RecordNotFound):
        developer.projects.find(projects[1].id)
    with pytest.raises(RecordNotFound):
        developer.projects.find(projects[0].id, projects[1].id)


def test_readonly_records_refuse_updates(db, developer, projects):
    developer.audited_projects.append(projects[0])
    db.expunge(projects[0])
    (project,) = developer.audited_projects.load_target()

    project.name = "Renamed"
    with pytest.raises(ReadOnlyRecord):
        db.flush()


def test_readonly_records_refuse_deletes(db, developer, projects):
    developer.audited_projects.append(projects[0])
    db.expunge(projects[0])
    (project,) = developer.audited_projects.load_target()

    db.delete(project)
    with pytest.raises(ReadOnlyRecord):
        db.flush()


def test_writable_records_flush(db, developer, projects):
    developer.projects.append(projects[0])
    (project,) = developer.projects.load_target()

    project.name = "Renamed"
    db.flush()
    db.expire(project)
    assert project.name == "Renamed"
