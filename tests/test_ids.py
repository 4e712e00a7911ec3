from attendance_dashboard.common.ids import new_id


def test_new_id_is_unique_within_process():
    ids = {new_id() for _ in range(2000)}
    assert len(ids) == 2000


def test_new_id_shape():
    millis, _, suffix = new_id().partition("-")
    assert millis.isdigit()
    assert len(suffix) == 9
