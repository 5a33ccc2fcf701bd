from kbwatch.kblist import main


def _make_device(root, name, **fields):
    entry = root / name
    entry.mkdir()
    for key, value in fields.items():
        (entry / key).write_text(value + "\n", encoding="ascii")
    return entry


def _keyboard(root, name="1-2", devnum="4"):
    return _make_device(
        root,
        name,
        busnum="1",
        devnum=devnum,
        idVendor="1234",
        idProduct="abcd",
        bDeviceClass="00",
        manufacturer="Acme",
        product="Keyboard",
        serial="placeholder",
    )


def test_prints_one_line_per_device(tmp_path, capsys):
    _keyboard(tmp_path)
    assert main(["--root", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert out == "Bus 001 | Address 004 | ID 1234:abcd | Acme | Keyboard | placeholder\n"


def test_skips_incomplete_entries(tmp_path, capsys):
    _keyboard(tmp_path, "1-2", "4")
    _keyboard(tmp_path, "1-3", "5")
    _make_device(tmp_path, "1-0:1.0", busnum="1")
    main(["--root", str(tmp_path)])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert all(line.startswith("Bus 001 | Address 00") for line in lines)


def test_missing_strings_leave_empty_columns(tmp_path, capsys):
    _make_device(
        tmp_path,
        "2-1",
        busnum="2",
        devnum="7",
        idVendor="1111",
        idProduct="2222",
        bDeviceClass="09",
    )
    main(["--root", str(tmp_path)])
    assert capsys.readouterr().out.endswith(" |  |  | \n")


def test_missing_root_prints_nothing(tmp_path, capsys):
    assert main(["--root", str(tmp_path / "absent")]) == 0
    assert capsys.readouterr().out == ""