from unittest.mock import patch, MagicMock

# Mock streamlit before importing the app
st_mock = MagicMock()


def test_view_registry_structure():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import VIEW_REGISTRY
    """
    Tests that the VIEW_REGISTRY has the correct structure.
    """
    assert isinstance(VIEW_REGISTRY, dict)
    for key, value in VIEW_REGISTRY.items():
        assert "label" in value
        assert "render_func" in value
        assert "sidebar" in value
        assert callable(value["render_func"])
        assert isinstance(value["sidebar"], bool)


def test_registry_covers_every_view_model_page():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import VIEW_REGISTRY
    """
    Every page a ViewModel can carry must have a view.
    """
    assert sorted(VIEW_REGISTRY) == ["about", "category", "home"]


def test_home_hides_sidebar_navigation():
    with patch.dict("sys.modules", {"streamlit": st_mock}):
        from app import VIEW_REGISTRY
    sidebar_pages = [key for key, value in VIEW_REGISTRY.items() if value["sidebar"]]
    assert sorted(sidebar_pages) == ["about", "category"]
