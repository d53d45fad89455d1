"""
Tests for drift.py — is sapconf still on its shipped configuration?
"""

from saptuner.drift import can_replace_sapconf, documents_equal


TEMPLATE = """\
## Path: System/SAP
# Governor
GOVERNOR="performance"
PERF_BIAS="0"
TUNED_PROFILE_0="sapconf"
TUNED_PROFILE_1="hana"
"""

REORDERED = """\
TUNED_PROFILE_1="hana"
PERF_BIAS=0
# a comment the template does not have

TUNED_PROFILE_0="sapconf"
GOVERNOR="performance"
"""


def _files(tmp_path, current=None, primary=None, fallback=None):
    cur = tmp_path / "etc" / "sapconf"
    tpl1 = tmp_path / "adm" / "sysconfig.sapconf"
    tpl2 = tmp_path / "share" / "sysconfig.sapconf"
    for path, text in ((cur, current), (tpl1, primary), (tpl2, fallback)):
        if text is not None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
    return cur, (tpl1, tpl2)


class TestDocumentsEqual:
    def test_order_and_comments_ignored(self):
        assert documents_equal(TEMPLATE, REORDERED) is True

    def test_single_value_differs(self):
        assert documents_equal(TEMPLATE, TEMPLATE.replace('"hana"', '"netweaver"')) is False

    def test_extra_key_differs(self):
        assert documents_equal(TEMPLATE, TEMPLATE + 'EXTRA="1"\n') is False

    def test_array_index_matters(self):
        assert documents_equal('A_0="x"\n', 'A_1="x"\n') is False

    def test_scalar_and_array_element_differ(self):
        assert documents_equal('A="x"\n', 'A_0="x"\n') is False


class TestCanReplaceSapconf:
    def test_identical_files(self, tmp_path):
        cur, tpls = _files(tmp_path, current=REORDERED, primary=TEMPLATE)
        assert can_replace_sapconf(cur, tpls) is True

    def test_customised_file(self, tmp_path):
        cur, tpls = _files(tmp_path, current=TEMPLATE.replace("performance", "powersave"),
                           primary=TEMPLATE)
        assert can_replace_sapconf(cur, tpls) is False

    def test_falls_back_to_second_template(self, tmp_path):
        cur, tpls = _files(tmp_path, current="X=1\n", fallback='X="2"\n')
        assert can_replace_sapconf(cur, tpls) is False

    def test_primary_template_wins_over_fallback(self, tmp_path):
        cur, tpls = _files(tmp_path, current="X=1\n", primary="X=1\n", fallback="X=2\n")
        assert can_replace_sapconf(cur, tpls) is True

    def test_missing_current_file(self, tmp_path):
        cur, tpls = _files(tmp_path, primary=TEMPLATE)
        assert can_replace_sapconf(cur, tpls) is True

    def test_missing_templates(self, tmp_path):
        cur, tpls = _files(tmp_path, current="X=1\n")
        assert can_replace_sapconf(cur, tpls) is True

    def test_nothing_exists(self, tmp_path):
        cur, tpls = _files(tmp_path)
        assert can_replace_sapconf(cur, tpls) is True
