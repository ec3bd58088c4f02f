from __future__ import annotations

from job_board_scraper.crawler.extraction import parse_document, resolve
from job_board_scraper.crawler.models import JobSeed

URL = "https://jobs.workable.com/view/A1B2C3D4E5"


def test_json_ld_page_without_seed(detail_json_ld_html):
    record = resolve(detail_json_ld_html, URL)

    assert record.url == URL
    assert record.title == "Senior Backend Engineer (DOM)"
    assert record.company == "Acme DOM"
    assert record.location == "Berlin, DE"
    assert record.date_posted == "2024-03-01"
    assert record.valid_through == "2024-04-30"
    assert record.description_html.startswith("<p>Build <strong>APIs</strong>")
    assert record.description_text == "Build APIs for our platform. Python PostgreSQL"
    assert record.job_types == ["FULL_TIME", "CONTRACTOR"]
    assert record.employment_type == "FULL_TIME, CONTRACTOR"
    assert record.salary == "EUR 70000–90000"
    assert record.workplace_type == "TELECOMMUTE"
    assert record.benefits == "Remote budget\n30 days PTO"
    assert record.industry == "Software"
    assert record.id == "A1B2C3D4E5"
    assert record.qualifications is None


def test_seed_fields_take_precedence_except_date(detail_json_ld_html):
    seed = JobSeed(
        url=URL,
        title="Senior Backend Engineer",
        company="Acme GmbH",
        location="Berlin, Germany",
        date_posted="2024-02-28",
        id="b3f1c2d4",
        shortcode="A1B2C3D4E5",
        department="Engineering",
        workplace_type="hybrid",
        employment_type="Full-time",
    )
    record = resolve(parse_document(detail_json_ld_html), URL, seed)

    assert record.title == "Senior Backend Engineer"
    assert record.company == "Acme GmbH"
    assert record.location == "Berlin, Germany"
    assert record.date_posted == "2024-03-01"
    assert record.id == "b3f1c2d4"
    assert record.shortcode == "A1B2C3D4E5"
    assert record.department == "Engineering"
    assert record.workplace_type == "hybrid"
    assert record.employment_type == "FULL_TIME, CONTRACTOR"


def test_dom_only_page(detail_dom_only_html):
    record = resolve(detail_dom_only_html, "https://jobs.workable.com/view/DOM1")

    assert record.title == "Junior Frontend Developer"
    assert record.company == "Umbrella Corp"
    assert record.location == "Lyon, France"
    assert record.job_types == ["Full-Time", "Remote"]
    assert record.date_posted == "3 days ago"
    assert record.description_text == "About the role Ship accessible interfaces."
    assert "<h2>About the role</h2>" in record.description_html
    assert record.salary is None
    assert record.valid_through is None


def test_seed_date_beats_visible_phrase(detail_dom_only_html):
    seed = JobSeed(url="https://jobs.workable.com/view/DOM1", date_posted="2024-03-05")
    record = resolve(detail_dom_only_html, seed.url, seed)
    assert record.date_posted == "2024-03-05"


def test_blank_seed_values_fall_through(detail_dom_only_html):
    seed = JobSeed(url="https://jobs.workable.com/view/DOM1", title="   ", company="")
    record = resolve(detail_dom_only_html, seed.url, seed)
    assert record.title == "Junior Frontend Developer"
    assert record.company == "Umbrella Corp"


def test_empty_page_resolves_to_nulls():
    record = resolve("<html><body><p>Nothing here</p></body></html>", URL)
    dumped = record.model_dump()
    assert dumped.pop("url") == URL
    assert all(value is None for value in dumped.values())


def test_entity_encoded_description_is_decoded():
    markup = (
        '<script type="application/ld+json">'
        '{"@type": "JobPosting", "description": "&lt;p&gt;Hello &amp;amp; welcome&lt;/p&gt;"}'
        "</script>"
    )
    record = resolve(markup, URL)
    assert record.description_html == "<p>Hello &amp; welcome</p>"
    assert record.description_text == "Hello & welcome"


def test_inline_location_label_and_posted_today():
    markup = """
    <div class="job-stats"><span>Location: Porto, Portugal</span><span>Contract</span></div>
    <p>Posted today</p>
    """
    record = resolve(markup, URL)
    assert record.location == "Porto, Portugal"
    assert record.job_types == ["Contract"]
    assert record.date_posted == "today"
