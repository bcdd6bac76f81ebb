"""Tests for locating the end of a test block."""

from casewright.conformance.insertion import depth_after, locate_insertion_point


class TestLocateInsertionPoint:
    def test_flat_block(self):
        lines = [
            "test('a', async ({ page }) => {",
            "    await page.goto('/');",
            "});",
        ]
        assert locate_insertion_point(lines, 0) == 2

    def test_nested_braces(self):
        lines = [
            "    test('a', async ({ page }) => {",
            "        if (ok) {",
            "            await page.click('#x');",
            "        }",
            "    });",
            "});",
        ]
        assert locate_insertion_point(lines, 0) == 4

    def test_object_literal_on_one_line(self):
        lines = [
            "test('a', async ({ page }) => {",
            "    await page.fill('#x', { timeout: 10 });",
            "});",
        ]
        assert locate_insertion_point(lines, 0) == 2

    def test_start_in_middle_of_file(self):
        lines = ["// header", "test('a', async () => {", "});", "test('b', async () => {", "});"]
        assert locate_insertion_point(lines, 3) == 4

    def test_unclosed(self):
        lines = ["test('a', async ({ page }) => {", "    await page.goto('/');"]
        assert locate_insertion_point(lines, 0) is None

    def test_braces_in_strings_are_counted(self):
        lines = [
            "test('a', async ({ page }) => {",
            "    await page.fill('#x', '}');",
            "});",
        ]
        assert locate_insertion_point(lines, 0) == 1


class TestDepthAfter:
    def test_block_closed_on_same_line(self):
        assert depth_after(" await page.goto('/login'); });") == 0

    def test_block_left_open(self):
        assert depth_after("") == 1

    def test_nested_open_brace(self):
        assert depth_after(" if (ok) {") == 2

    def test_stops_when_block_closes(self):
        assert depth_after(" }); }); {") == 0
