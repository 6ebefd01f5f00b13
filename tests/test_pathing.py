from __future__ import annotations

import unittest

from diskloc.errors import PathResolutionError
from diskloc.pathing import (
    combine,
    drive_letter,
    get_directory_from_path,
    get_file_from_path,
    has_drive,
    make_relative_path,
    resolve_relative_path,
    separator_for,
    split_root,
)


class ResolveRelativePathTests(unittest.TestCase):
    def test_collapses_dot_segments(self) -> None:
        self.assertEqual(resolve_relative_path("", "a/./b/../c", native="/"), "a/c")
        self.assertEqual(resolve_relative_path("a", "./b/../c", native="/"), "a/c")

    def test_windows_parent_reference_from_drive_root(self) -> None:
        for native in ("/", "\\"):
            resolved = resolve_relative_path("C:\\images", "..\\base\\parent.vhd", native=native)
            self.assertEqual(resolved, "C:\\base\\parent.vhd")

    def test_windows_reference_against_posix_directory(self) -> None:
        resolved = resolve_relative_path("/srv/images", "..\\base\\parent.vhd", native="/")
        self.assertEqual(resolved, "/srv/base/parent.vhd")

    def test_unc_root_is_kept(self) -> None:
        resolved = resolve_relative_path("\\\\server\\share\\vms", "..\\base.vhd", native="\\")
        self.assertEqual(resolved, "\\\\server\\share\\base.vhd")

    def test_rooted_reference_replaces_base(self) -> None:
        self.assertEqual(resolve_relative_path("/srv", "/etc/disk.img", native="/"), "/etc/disk.img")

    def test_parent_segments_above_a_root_are_dropped(self) -> None:
        self.assertEqual(resolve_relative_path("/srv", "../../x.img", native="/"), "/x.img")

    def test_leading_parent_segments_of_relative_paths_are_kept(self) -> None:
        self.assertEqual(resolve_relative_path("a", "../../b", native="/"), "../b")
        self.assertEqual(resolve_relative_path("../images", "child.vhd", native="/"), "../images/child.vhd")
        self.assertEqual(resolve_relative_path("../images", "../../x.vhd", native="/"), "../../x.vhd")
        self.assertEqual(resolve_relative_path("..\\images", "..\\base\\p.vhd", native="/"), "..\\base\\p.vhd")

    def test_strict_mode_accepts_relative_bases_above_the_working_directory(self) -> None:
        self.assertEqual(
            resolve_relative_path("../images", "child.vhd", native="/", strict=True),
            "../images/child.vhd",
        )
        self.assertEqual(resolve_relative_path("a", "../../b", native="/", strict=True), "../b")

    def test_strict_mode_rejects_escaping_parent_segments(self) -> None:
        with self.assertRaises(PathResolutionError):
            resolve_relative_path("C:\\srv", "..\\..\\x.vhd", native="/", strict=True)
        self.assertEqual(
            resolve_relative_path("C:\\srv", "..\\x.vhd", native="/", strict=True),
            "C:\\x.vhd",
        )

    def test_trailing_separator_and_empty_result(self) -> None:
        self.assertEqual(resolve_relative_path("/srv", "images/", native="/"), "/srv/images/")
        self.assertEqual(resolve_relative_path("a", "..", native="/"), ".")

    def test_resolved_path_splits_and_recombines(self) -> None:
        cases = [
            ("/srv/images", "child.vhd"),
            ("C:\\images", "..\\base\\parent.vhd"),
            ("data", "./extents/s001.vmdk"),
            ("\\\\server\\share", "vms\\disk.vhdx"),
        ]
        for base, ref in cases:
            with self.subTest(base=base, ref=ref):
                resolved = resolve_relative_path(base, ref, native="/")
                directory = get_directory_from_path(resolved, native="/")
                name = get_file_from_path(resolved, native="/")
                self.assertEqual(directory + separator_for(resolved, native="/") + name, resolved)


class SplitPathTests(unittest.TestCase):
    def test_splits_backslash_paths_on_posix_hosts(self) -> None:
        self.assertEqual(get_file_from_path("C:\\images\\child.vhd", native="/"), "child.vhd")
        self.assertEqual(get_directory_from_path("C:\\images\\child.vhd", native="/"), "C:\\images")
        self.assertEqual(get_file_from_path("images\\child.vhd", native="/"), "child.vhd")
        self.assertEqual(get_directory_from_path("images\\child.vhd", native="/"), "images")

    def test_splits_posix_paths(self) -> None:
        self.assertEqual(get_directory_from_path("/srv/images/a.vmdk", native="/"), "/srv/images")
        self.assertEqual(get_file_from_path("/srv/images/a.vmdk", native="/"), "a.vmdk")
        self.assertEqual(get_directory_from_path("/a.vmdk", native="/"), "/")

    def test_root_level_file_keeps_root_separator(self) -> None:
        resolved = resolve_relative_path("/", "x.img", native="/")
        self.assertEqual(resolved, "/x.img")
        self.assertEqual(get_directory_from_path(resolved, native="/"), "/")
        self.assertEqual(get_file_from_path(resolved, native="/"), "x.img")
        self.assertEqual(get_directory_from_path("C:\\x.vhd", native="/"), "C:\\")

    def test_bare_names(self) -> None:
        self.assertEqual(get_directory_from_path("child.vhd", native="/"), "")
        self.assertEqual(get_file_from_path("child.vhd", native="/"), "child.vhd")
        self.assertEqual(get_directory_from_path("C:child.vhd", native="/"), "C:")
        self.assertEqual(get_file_from_path("C:child.vhd", native="/"), "child.vhd")

    def test_posix_names_may_contain_backslashes(self) -> None:
        self.assertEqual(get_file_from_path("dir/we\\ird.img", native="/"), "we\\ird.img")

    def test_windows_hosts_accept_forward_slashes(self) -> None:
        self.assertEqual(get_file_from_path("images/child.vhd", native="\\"), "child.vhd")
        self.assertEqual(get_directory_from_path("images/child.vhd", native="\\"), "images")


class PathPrimitiveTests(unittest.TestCase):
    def test_drive_detection(self) -> None:
        self.assertTrue(has_drive("C:"))
        self.assertFalse(has_drive("1:\\x"))
        self.assertEqual(drive_letter("c:\\x"), "C")
        self.assertIsNone(drive_letter("/x"))

    def test_split_root(self) -> None:
        self.assertEqual(split_root("C:\\images", native="/"), ("C:\\", "images"))
        self.assertEqual(split_root("/srv/images", native="/"), ("/", "srv/images"))
        self.assertEqual(split_root("images", native="/"), ("", "images"))
        self.assertEqual(split_root("\\\\server\\share", native="\\"), ("\\\\", "server\\share"))

    def test_combine(self) -> None:
        self.assertEqual(combine("C:\\images", "child.vhd", native="/"), "C:\\images\\child.vhd")
        self.assertEqual(combine("a/", "b", native="/"), "a/b")
        self.assertEqual(combine("C:", "x.vhd", native="/"), "C:x.vhd")
        self.assertEqual(combine("/srv", "/etc", native="/"), "/etc")
        self.assertEqual(combine("", "x", native="/"), "x")
        self.assertEqual(combine("x", "", native="/"), "x")


class MakeRelativePathTests(unittest.TestCase):
    def test_parent_in_sibling_directory(self) -> None:
        self.assertEqual(
            make_relative_path("C:\\base\\parent.vhd", "C:\\images", native="/"),
            "..\\base\\parent.vhd",
        )
        self.assertEqual(make_relative_path("/srv/base/p.vhd", "/srv/images", native="/"), "../base/p.vhd")

    def test_backslash_paths_compare_case_insensitively(self) -> None:
        self.assertEqual(make_relative_path("c:\\Images\\Base.vhd", "C:\\images", native="/"), "Base.vhd")
        self.assertEqual(make_relative_path("Images\\Base.vhd", "images", native="/"), "Base.vhd")

    def test_different_roots_return_path_unchanged(self) -> None:
        self.assertEqual(make_relative_path("D:\\x.vhd", "C:\\images", native="/"), "D:\\x.vhd")

    def test_same_directory(self) -> None:
        self.assertEqual(make_relative_path("/srv/images", "/srv/images", native="/"), ".")


if __name__ == "__main__":
    unittest.main()
