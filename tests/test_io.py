import logging

import h5py
import numpy as np
import pytest
import scipy.io

from spaanalysis.model.configuration import DatasetValidationError
from spaanalysis.model.io import DatasetFormatError, load_dataset, save_dataset
from spaanalysis.model.materials import Material


def _write_mat_v5(path, trajectories):
    config = np.zeros((1, len(trajectories)), dtype=[('x', 'O'), ('y', 'O')])
    for i, (x, y) in enumerate(trajectories):
        config['x'][0, i] = np.asarray(x, dtype=float)
        config['y'][0, i] = np.asarray(y, dtype=float)
    scipy.io.savemat(path, {'config': config})


def _write_mat_v73(path, trajectories):
    # Layout MATLAB uses for a 1xN struct array saved with -v7.3
    with h5py.File(path, "w") as f:
        refs_grp = f.create_group("#refs#")
        grp = f.create_group("config")
        x_refs, y_refs = [], []
        for i, (x, y) in enumerate(trajectories):
            x_refs.append(refs_grp.create_dataset(f"x{i}", data=np.asarray(x, dtype=float)[:, None]).ref)
            y_refs.append(refs_grp.create_dataset(f"y{i}", data=np.asarray(y, dtype=float)[:, None]).ref)
        grp.create_dataset("x", data=np.array(x_refs, dtype=h5py.ref_dtype)[:, None])
        grp.create_dataset("y", data=np.array(y_refs, dtype=h5py.ref_dtype)[:, None])


def test_mat_v5_applies_positional_materials(tmp_path):
    trajectories = [([0.0, float(i), 2.0], [1.0, 2.0, float(-i)]) for i in range(1, 29)]
    path = str(tmp_path / "OverLapMat.mat")
    _write_mat_v5(path, trajectories)

    configurations = load_dataset(path)

    assert len(configurations) == 28
    assert [c.index for c in configurations] == list(range(1, 29))
    assert configurations[25].material == Material.DRAGON_SKIN_ONLY
    assert configurations[26].material == Material.DRAGON_SKIN_ECOFLEX
    np.testing.assert_array_equal(configurations[4].x, [0.0, 5.0, 2.0])
    np.testing.assert_array_equal(configurations[4].y, [1.0, 2.0, -5.0])


def test_mat_v5_single_struct(tmp_path):
    path = str(tmp_path / "single.mat")
    _write_mat_v5(path, [([1.0, 2.0, 3.0, 4.0], [0.0, 1.0, 0.0, -1.0])])

    configurations = load_dataset(path)

    assert len(configurations) == 1
    assert configurations[0].n_samples == 4


def test_mat_v5_without_config_variable(tmp_path):
    path = str(tmp_path / "other.mat")
    scipy.io.savemat(path, {'data': np.arange(3.0)})

    with pytest.raises(DatasetFormatError, match="'config'"):
        load_dataset(path)


def test_mat_v73(tmp_path):
    path = str(tmp_path / "OverLapMat73.mat")
    _write_mat_v73(path, [([0, 1, 2], [0, 1, 2]), ([0, 1, 2, 3], [0, -1, -2, -3])])

    configurations = load_dataset(path, material_split=1)

    assert [c.n_samples for c in configurations] == [3, 4]
    assert configurations[1].material == Material.DRAGON_SKIN_ECOFLEX
    np.testing.assert_array_equal(configurations[1].y, [0, -1, -2, -3])


def test_hdf5_round_trip_keeps_order_and_materials(tmp_path, small_dataset):
    path = str(tmp_path / "dataset.h5")

    save_dataset(small_dataset, path)
    loaded = load_dataset(path, material_split=1)

    assert [c.index for c in loaded] == [1, 2, 3, 4, 5]
    assert [c.material for c in loaded] == [c.material for c in small_dataset]
    for original, restored in zip(small_dataset, loaded):
        np.testing.assert_array_equal(original.points, restored.points)
    with h5py.File(path, "r") as f:
        assert "version" in f.attrs


def test_csv_with_material_column(tmp_path):
    path = tmp_path / "dataset.csv"
    path.write_text(
        "config,x,y,material\n"
        "run-b,0,1,Dragon Skin + Ecoflex\n"
        "run-a,0,-1,DragonSkinOnly\n"
        "run-b,1,2,Dragon Skin + Ecoflex\n"
        "run-a,1,-2,DragonSkinOnly\n"
        "run-a,2,-3,DragonSkinOnly\n"
    )

    configurations = load_dataset(str(path))

    # order of first appearance
    assert [c.n_samples for c in configurations] == [2, 3]
    assert configurations[0].material == Material.DRAGON_SKIN_ECOFLEX
    assert configurations[1].material == Material.DRAGON_SKIN_ONLY
    np.testing.assert_array_equal(configurations[1].y, [-1, -2, -3])


def test_csv_semicolon_without_material(tmp_path):
    path = tmp_path / "dataset.csv"
    path.write_text("config;x;y\n1;0;0\n1;1;1\n2;0;0\n2;1;-1\n")

    configurations = load_dataset(str(path), material_split=1)

    assert [c.material for c in configurations] == [Material.DRAGON_SKIN_ONLY, Material.DRAGON_SKIN_ECOFLEX]


def test_csv_errors(tmp_path):
    missing = tmp_path / "missing_column.csv"
    missing.write_text("config,x\n1,0\n")
    with pytest.raises(DatasetFormatError, match="y"):
        load_dataset(str(missing))

    conflicting = tmp_path / "conflicting.csv"
    conflicting.write_text("config,x,y,material\n1,0,0,DragonSkinOnly\n1,1,1,DragonSkin+Ecoflex\n")
    with pytest.raises(DatasetValidationError, match="Configuration 1"):
        load_dataset(str(conflicting))


def test_unreadable_inputs(tmp_path):
    with pytest.raises(DatasetFormatError):
        load_dataset(str(tmp_path / "does_not_exist.mat"))

    unknown = tmp_path / "dataset.json"
    unknown.write_text("{}")
    with pytest.raises(DatasetFormatError, match="Unsupported"):
        load_dataset(str(unknown))


def test_hdf5_keeps_stored_indices(tmp_path, make_config):
    path = str(tmp_path / "subset.h5")
    save_dataset([
        make_config(9, [0, 1, 2], [0, 1, 2], Material.DRAGON_SKIN_ECOFLEX),
        make_config(5, [0, 1], [0, -1]),
    ], path)

    loaded = load_dataset(path)

    assert [c.index for c in loaded] == [5, 9]
    assert [c.n_samples for c in loaded] == [2, 3]
    assert loaded[1].material == Material.DRAGON_SKIN_ECOFLEX


def test_hdf5_duplicate_indices_are_rejected(tmp_path):
    path = str(tmp_path / "duplicates.h5")
    with h5py.File(path, "w") as f:
        grp = f.create_group("configurations")
        for name in ("a", "b"):
            grp_cfg = grp.create_group(name)
            grp_cfg.attrs["index"] = 3
            grp_cfg.create_dataset("x", data=np.arange(3.0))
            grp_cfg.create_dataset("y", data=np.arange(3.0))

    with pytest.raises(DatasetFormatError, match="duplicate"):
        load_dataset(path)


def test_conflicting_csv_materials_are_logged(tmp_path, caplog):
    path = tmp_path / "conflicting.csv"
    path.write_text("config,x,y,material\n1,0,0,DragonSkinOnly\n1,1,1,DragonSkin+Ecoflex\n")

    with caplog.at_level(logging.ERROR, logger="spaanalysis"):
        with pytest.raises(DatasetValidationError):
            load_dataset(str(path))

    assert any("conflicting materials" in record.getMessage() for record in caplog.records)
