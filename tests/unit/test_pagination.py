from app.crud.pagination import PageMeta, PageRequest, parse_positive_int


def test_parse_positive_int_falls_back_to_default():
    assert parse_positive_int(None, 10) == 10
    assert parse_positive_int("", 10) == 10
    assert parse_positive_int("abc", 10) == 10
    assert parse_positive_int("0", 10) == 10
    assert parse_positive_int("-3", 10) == 10
    assert parse_positive_int("4", 10) == 4


def test_normalize_caps_limit_and_defaults_order():
    page = PageRequest.normalize(page="2", limit="500", max_limit=100)
    assert page.page == 2
    assert page.limit == 100
    assert page.sort_order == "asc"
    assert page.offset == 100


def test_normalize_accepts_desc_in_any_case():
    assert PageRequest.normalize(sort_order="DESC").sort_order == "desc"
    assert PageRequest.normalize(sort_order="sideways").sort_order == "asc"


def test_page_meta_flags():
    meta = PageMeta.build(PageRequest(page=2, limit=10), total=25)
    assert meta.total_pages == 3
    assert meta.has_next
    assert meta.has_prev

    last = PageMeta.build(PageRequest(page=3, limit=10), total=25)
    assert not last.has_next

    empty = PageMeta.build(PageRequest(page=1, limit=10), total=0)
    assert empty.total_pages == 0
    assert not empty.has_next
    assert not empty.has_prev
