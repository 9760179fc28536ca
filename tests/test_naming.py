from utils.naming import display_name_for, split_extension, title_from_filename


def test_title_from_filename_examples():
    assert title_from_filename("abstract-painting-2023.png") == "Abstract Painting 2023"
    assert title_from_filename("living-room.jpg") == "Living Room"


def test_title_mixes_hyphen_and_underscore():
    assert title_from_filename("blue_moon--study.JPEG") == "Blue Moon Study"


def test_title_lowercases_rest_of_word():
    assert title_from_filename("BIG-coat.webp") == "Big Coat"


def test_split_extension():
    assert split_extension("coat.JPG") == ("coat", "jpg")
    assert split_extension("archive.tar.gz") == ("archive.tar", "gz")
    assert split_extension("README") == ("README", "")
    assert split_extension(".hidden") == (".hidden", "")


def test_display_name_overrides_and_fallback():
    assert display_name_for("about") == "About"
    assert display_name_for("fibers") == "Fiber Art"
    assert display_name_for("fiber art") == "Fiber Art"
    assert display_name_for("mixed-media") == "Mixed Media"
    assert display_name_for("garments") == "Garments"
