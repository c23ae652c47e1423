"""
Dataset Input/Output
Reads the recorded actuator trajectories (MATLAB, HDF5 or CSV) into
Configuration records, and writes them back to the package's HDF5 layout.
"""
import csv
import logging
import os
from importlib.metadata import version, PackageNotFoundError
from typing import Dict, List, Optional, Sequence

import h5py
import numpy as np
import scipy.io

from spaanalysis.config import MATERIAL_SPLIT_INDEX
from spaanalysis.model.configuration import Configuration, DatasetValidationError
from spaanalysis.model.materials import Material, material_for_index, parse_material

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("spaanalysis")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

MAT_VARIABLE = "config"
HDF5_GROUP = "configurations"
HDF5_EXTENSIONS = (".h5", ".hdf5")


class DatasetFormatError(ValueError):
    """The dataset file cannot be read as a collection of x/y trajectories."""


class DatasetIO:

    @staticmethod
    def load_dataset(filepath: str, material_split: int = MATERIAL_SPLIT_INDEX) -> List[Configuration]:
        """
        Load all configurations of a dataset, preserving their recorded order.

        Args:
            filepath: Path to a .mat, .h5/.hdf5 or .csv file.
            material_split: Last index of the Dragon Skin only block; used only
                when the file does not carry a material per configuration.

        Returns:
            Configurations in file order, numbered by the index stored in the
            file (HDF5 layout) or by their 1-based position otherwise.
        """
        logger.info(f"Loading dataset from: {filepath}")
        if not os.path.exists(filepath):
            msg = f"Dataset file '{filepath}' does not exist."
            logger.error(msg)
            raise DatasetFormatError(msg)

        ext = os.path.splitext(filepath)[1].lower()
        if ext == ".mat":
            if h5py.is_hdf5(filepath):
                raw = DatasetIO._read_mat_v73(filepath)
            else:
                raw = DatasetIO._read_mat_v5(filepath)
        elif ext in HDF5_EXTENSIONS:
            raw = DatasetIO._read_hdf5(filepath)
        elif ext == ".csv":
            raw = DatasetIO._read_csv(filepath)
        else:
            msg = f"Unsupported dataset format '{ext}' ({filepath})."
            logger.error(msg)
            raise DatasetFormatError(msg)

        if not raw:
            msg = f"Dataset '{filepath}' contains no configurations."
            logger.error(msg)
            raise DatasetFormatError(msg)

        indices = [stored if stored is not None else i for i, (stored, _, _, _) in enumerate(raw, start=1)]
        if len(set(indices)) != len(indices):
            msg = f"Dataset '{filepath}' stores duplicate configuration indices."
            logger.error(msg)
            raise DatasetFormatError(msg)

        configurations = []
        for i, (_, x, y, material) in zip(indices, raw):
            if material is None:
                material = material_for_index(i, material_split)
            try:
                configurations.append(Configuration(index=i, x=x, y=y, material=material))
            except DatasetValidationError as e:
                logger.error(f"Invalid dataset '{filepath}': {e}")
                raise

        logger.info(f"Loaded {len(configurations)} configurations.")
        return configurations

    @staticmethod
    def save_dataset(configurations: Sequence[Configuration], filepath: str) -> None:
        logger.info(f"Saving {len(configurations)} configurations to: {filepath}")
        with h5py.File(filepath, "w") as f:
            f.attrs["version"] = APP_VERSION
            grp = f.create_group(HDF5_GROUP)
            for config in configurations:
                grp_cfg = grp.create_group(f"config_{config.index:04d}")
                grp_cfg.attrs["index"] = config.index
                grp_cfg.attrs["material"] = config.material.value
                grp_cfg.create_dataset("x", data=np.asarray(config.x))
                grp_cfg.create_dataset("y", data=np.asarray(config.y))
        logger.info(f"Dataset saved to: {filepath}")

    # --- READERS ---
    # Each reader returns [(stored index or None, x, y, material or None), ...] in recorded order.
    # Without a stored index a configuration is numbered by its position (1-based).

    @staticmethod
    def _read_mat_v5(filepath: str) -> list:
        try:
            data = scipy.io.loadmat(filepath, squeeze_me=True, struct_as_record=False)
        except (ValueError, NotImplementedError) as e:
            msg = f"Could not read MATLAB file '{filepath}': {e}"
            logger.error(msg)
            raise DatasetFormatError(msg) from e

        if MAT_VARIABLE not in data:
            msg = f"MATLAB file '{filepath}' has no '{MAT_VARIABLE}' variable."
            logger.error(msg)
            raise DatasetFormatError(msg)

        # squeeze_me turns a 1x1 struct array into a bare mat_struct
        structs = np.atleast_1d(data[MAT_VARIABLE]).ravel()
        raw = []
        for i, item in enumerate(structs, start=1):
            if not (hasattr(item, "x") and hasattr(item, "y")):
                msg = f"Element {i} of '{MAT_VARIABLE}' has no 'x'/'y' fields."
                logger.error(msg)
                raise DatasetFormatError(msg)
            raw.append((None, np.atleast_1d(item.x), np.atleast_1d(item.y), None))
        logger.debug(f"Read {len(raw)} structs from MAT v5 file.")
        return raw

    @staticmethod
    def _read_mat_v73(filepath: str) -> list:
        with h5py.File(filepath, "r") as f:
            if MAT_VARIABLE not in f:
                msg = f"MATLAB file '{filepath}' has no '{MAT_VARIABLE}' variable."
                logger.error(msg)
                raise DatasetFormatError(msg)
            grp = f[MAT_VARIABLE]
            if not isinstance(grp, h5py.Group) or "x" not in grp or "y" not in grp:
                msg = f"'{MAT_VARIABLE}' in '{filepath}' is not a struct with 'x'/'y' fields."
                logger.error(msg)
                raise DatasetFormatError(msg)

            xs = DatasetIO._read_mat_v73_field(f, grp["x"])
            ys = DatasetIO._read_mat_v73_field(f, grp["y"])

        if len(xs) != len(ys):
            msg = f"'{MAT_VARIABLE}' in '{filepath}' has {len(xs)} x fields but {len(ys)} y fields."
            logger.error(msg)
            raise DatasetFormatError(msg)
        logger.debug(f"Read {len(xs)} structs from MAT v7.3 file.")
        return [(None, x, y, None) for x, y in zip(xs, ys)]

    @staticmethod
    def _read_mat_v73_field(f: h5py.File, dataset: h5py.Dataset) -> List[np.ndarray]:
        # Struct arrays store one object reference per element, a 1x1 struct stores the data inline
        if h5py.check_dtype(ref=dataset.dtype) is None:
            return [np.asarray(dataset[()], dtype=np.float64).ravel()]
        return [np.asarray(f[ref][()], dtype=np.float64).ravel() for ref in dataset[()].ravel()]

    @staticmethod
    def _read_hdf5(filepath: str) -> list:
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise DatasetFormatError(msg)

        with h5py.File(filepath, "r") as f:
            if HDF5_GROUP not in f:
                msg = f"HDF5 file '{filepath}' has no '{HDF5_GROUP}' group."
                logger.error(msg)
                raise DatasetFormatError(msg)
            logger.debug(f"Dataset written by version {f.attrs.get('version', 'unknown')}.")

            entries = []
            for name, grp_cfg in f[HDF5_GROUP].items():
                if "x" not in grp_cfg or "y" not in grp_cfg:
                    msg = f"Configuration '{name}' in '{filepath}' has no 'x'/'y' datasets."
                    logger.error(msg)
                    raise DatasetFormatError(msg)
                index = int(grp_cfg.attrs.get("index", len(entries) + 1))
                material = grp_cfg.attrs.get("material")
                if isinstance(material, bytes):
                    material = material.decode('utf-8')
                entries.append((index, grp_cfg["x"][:], grp_cfg["y"][:], material))

        # Recorded order is the stored index, not the HDF5 iteration order
        entries.sort(key=lambda e: e[0])
        return [
            (index, x, y, DatasetIO._parse_material(index, material))
            for index, x, y, material in entries
        ]

    @staticmethod
    def _read_csv(filepath: str) -> list:
        columns: Dict[str, Dict[str, list]] = {}
        with open(filepath, mode='r', encoding='utf-8-sig', newline='') as f:
            line = f.readline()
            delimiter = ';' if ';' in line else ','
            f.seek(0)
            reader = csv.DictReader(f, delimiter=delimiter)
            fieldnames = [name.strip().lower() for name in (reader.fieldnames or [])]
            missing = {"config", "x", "y"} - set(fieldnames)
            if missing:
                msg = f"CSV file '{filepath}' is missing columns: {', '.join(sorted(missing))}."
                logger.error(msg)
                raise DatasetFormatError(msg)
            reader.fieldnames = fieldnames

            for row_number, row in enumerate(reader, start=2):
                key = (row["config"] or "").strip()
                if not key:
                    continue
                try:
                    x = float(row["x"])
                    y = float(row["y"])
                except (TypeError, ValueError) as e:
                    msg = f"CSV file '{filepath}', line {row_number}: non-numeric sample ({e})."
                    logger.error(msg)
                    raise DatasetFormatError(msg) from e
                # dicts keep insertion order, i.e. first appearance of each configuration
                entry = columns.setdefault(key, {"x": [], "y": [], "material": []})
                entry["x"].append(x)
                entry["y"].append(y)
                material = (row.get("material") or "").strip()
                if material:
                    entry["material"].append(material)

        raw = []
        for i, entry in enumerate(columns.values(), start=1):
            materials = set(entry["material"])
            if len(materials) > 1:
                error = DatasetValidationError(i, f"conflicting materials {sorted(materials)}.")
                logger.error(f"Invalid dataset '{filepath}': {error}")
                raise error
            material = DatasetIO._parse_material(i, materials.pop()) if materials else None
            raw.append((None, entry["x"], entry["y"], material))
        return raw

    @staticmethod
    def _parse_material(index: int, value: Optional[str]) -> Optional[Material]:
        if not value:
            return None
        try:
            return parse_material(value)
        except ValueError as e:
            raise DatasetValidationError(index, str(e)) from e


load_dataset = DatasetIO.load_dataset
save_dataset = DatasetIO.save_dataset
