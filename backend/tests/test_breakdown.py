from hire_api.pricing import (
    DEFAULT_CATALOG,
    AdditionalService,
    BasePackage,
    EstimateRequest,
    PriceCatalog,
    ServicePrice,
    compute_breakdown,
    compute_estimate,
    estimate_with_breakdown,
)


def lines_for(**kwargs):
    return [(line.item, line.price) for line in compute_breakdown(DEFAULT_CATALOG, EstimateRequest(**kwargs))]


def test_ecommerce_maintenance_line():
    lines = compute_breakdown(
        DEFAULT_CATALOG,
        EstimateRequest(
            project_type="ecommerce",
            selected_additional_services=("maintenance",),
            needs_maintenance=True,
        ),
    )
    assert [(line.item, line.price) for line in lines] == [
        ("E-commerce Platform", "£800-1500"),
        ("Maintenance Package", "£150/month"),
        ("ecommerce maintenance", "£150/month"),
    ]
    assert [line.included_in_total for line in lines] == [True, False, False]


def test_lines_follow_selection_order_not_catalog_order():
    lines = lines_for(
        project_type="business",
        selected_features=("payments", "blog", "gallery"),
        selected_additional_services=("seo", "training"),
    )
    assert lines == [
        ("Business Website", "£500-800"),
        ("Payment Integration", "£350"),
        ("Blog/News Section", "£100"),
        ("Image Gallery", "£80"),
        ("Advanced SEO Setup", "£200-500"),
        ("Training Session", "£150-300"),
    ]


def test_timeline_lines():
    assert lines_for(project_type="personal", timeline="rush")[-1] == ("Rush delivery", "+30%")
    assert lines_for(project_type="personal", timeline="flexible")[-1] == ("Flexible timeline discount", "-10%")
    assert lines_for(project_type="personal", timeline="normal") == [("Personal Website", "£300-600")]


def test_line_count_property():
    features = ("blog", "gallery", "liveChat")
    services = ("seo", "hosting")
    for timeline in ("rush", "normal", "flexible"):
        for needs_maintenance in (True, False):
            lines = compute_breakdown(
                DEFAULT_CATALOG,
                EstimateRequest(
                    project_type="saas",
                    selected_features=features,
                    selected_additional_services=services,
                    timeline=timeline,
                    needs_maintenance=needs_maintenance,
                ),
            )
            expected = 1 + len(features) + len(services) + (timeline != "normal") + needs_maintenance
            assert len(lines) == expected


def test_unknown_keys_are_skipped():
    assert lines_for(project_type="personal", selected_features=("blog", "hovercraft")) == [
        ("Personal Website", "£300-600"),
        ("Blog/News Section", "£100"),
    ]


def test_modifiers_are_shown_but_flagged_as_excluded():
    lines = compute_breakdown(
        DEFAULT_CATALOG,
        EstimateRequest(project_type="business", selected_additional_services=("prioritySupport", "logo")),
    )
    flags = {line.item: (line.price, line.included_in_total) for line in lines}
    assert flags["Priority Support"] == ("+15%", False)
    assert flags["Logo Design"] == ("£150-400", True)


def test_included_lines_sum_to_estimate_before_timeline():
    request = EstimateRequest(
        project_type="business",
        selected_features=("blog", "booking"),
        selected_additional_services=("hosting", "prioritySupport", "maintenance"),
        needs_maintenance=True,
    )
    priced = estimate_with_breakdown(DEFAULT_CATALOG, request)
    included = [line for line in priced.breakdown[1:] if line.included_in_total]
    extras = sum(int(line.price.lstrip("£").split("-")[0]) for line in included)
    assert priced.estimate.min == 500 + extras
    assert priced.estimate.max == 800 + extras


def test_custom_price_is_displayed_and_not_totalled():
    catalog = PriceCatalog(
        base_packages={"personal": BasePackage(300, 600, "Personal Website")},
        features={},
        additional_services={"audit": AdditionalService(ServicePrice.parse("call for price"), "Site Audit")},
        timeline_multipliers={"normal": 1.0},
    )
    request = EstimateRequest(project_type="personal", selected_additional_services=("audit",))
    lines = compute_breakdown(catalog, request)
    assert (lines[-1].item, lines[-1].price, lines[-1].included_in_total) == ("Site Audit", "call for price", False)
    assert compute_estimate(catalog, request).as_dict() == {"min": 300, "max": 600}


def test_maintenance_without_fee_is_quoted_separately():
    catalog = PriceCatalog(
        base_packages={"personal": BasePackage(300, 600, "Personal Website")},
        features={},
        additional_services={},
        timeline_multipliers={"normal": 1.0},
    )
    lines = compute_breakdown(catalog, EstimateRequest(project_type="personal", needs_maintenance=True))
    assert lines[-1].price == "quoted separately"


def test_as_dict_payload():
    priced = estimate_with_breakdown(
        DEFAULT_CATALOG, EstimateRequest(project_type="personal", selected_features=("blog",))
    )
    assert priced.as_dict() == {
        "min": 400,
        "max": 700,
        "breakdown": [
            {"item": "Personal Website", "price": "£300-600", "included_in_total": True},
            {"item": "Blog/News Section", "price": "£100", "included_in_total": True},
        ],
    }
