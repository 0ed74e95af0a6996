import json

from ecotrack.cli import main


def test_nearby_json_output(capsys):
    code = main(["nearby", "--lat", "40.7128", "--lng", "-74.0060", "--limit", "2", "--json"])
    assert code == 0

    data = json.loads(capsys.readouterr().out)
    assert [c["name"] for c in data] == ["EcoRecycle Center", "Green Planet Recycling"]
    assert data[0]["acceptedMaterials"] == ["Paper", "Glass", "Plastic", "Metal"]
    assert data[0]["distance"] == 0.0


def test_nearby_text_output_with_material(capsys):
    code = main(["nearby", "--lat", "40.7128", "--lng", "-74.0060", "--material", "batteries"])
    assert code == 0

    out = capsys.readouterr().out
    assert "City Recycling Facility" in out
    assert "EcoRecycle Center" not in out
    assert " mi" in out


def test_nearby_without_matches(capsys):
    main(["nearby", "--lat", "0", "--lng", "0", "--material", "Uranium"])
    assert "No recycling centers match." in capsys.readouterr().out


def test_materials_lists_one_per_line(capsys):
    assert main(["materials"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Paper"
    assert "Compostable Materials" in lines
    assert len(lines) == len(set(lines))
