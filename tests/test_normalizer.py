from config_drift.drift_analyzer import Role, normalize_value


def test_pt_prefix_is_stripped_everywhere():
    assert normalize_value("pt-svc", Role.PT) == "svc"
    assert normalize_value("http://pt-api.pt-zone/x", Role.PT) == "http://api.zone/x"


def test_prod_rules_strip_prod_prd_and_contents():
    assert normalize_value("prod-svc", Role.PROD) == "svc"
    assert normalize_value("prd-svc", Role.PROD) == "svc"
    assert normalize_value("bucket-contents", Role.PROD) == "bucket-"


def test_pt_contents_rule_applies_after_prefix_rule():
    # "pt-" goes first, so "contents-pt-x" loses its trailing "pt-" before
    # the "contents-pt" rule can match
    assert normalize_value("contents-pt-x", Role.PT) == "contents-x"
    assert normalize_value("s3://contents-pt", Role.PT) == "s3://"


def test_roles_do_not_share_rules():
    assert normalize_value("prod-svc", Role.PT) == "prod-svc"
    assert normalize_value("pt-svc", Role.PROD) == "pt-svc"


def test_empty_and_missing_values_normalize_to_empty_string():
    assert normalize_value(None, Role.PT) == ""
    assert normalize_value("", Role.PROD) == ""


def test_value_made_only_of_labels_becomes_empty():
    assert normalize_value("pt-", Role.PT) == ""
    assert normalize_value("prod-prd-", Role.PROD) == ""
