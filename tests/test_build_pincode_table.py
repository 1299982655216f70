"""
Tests for the offline pincode CSV conversion.
"""
import json

import pandas as pd

from scripts.build_pincode_table import build_table, clean_coordinate, update_pincode_table

CSV_HEADER = "circlename,regionname,divisionname,officename,pincode,officetype,delivery,district,statename,latitude,longitude\n"


class TestBuildPincodeTable:

    def test_build_table_skips_invalid_rows(self):
        df = pd.DataFrame([
            {"pincode": "400099", "district": "Mumbai", "statename": "Maharashtra",
             "latitude": "19.1", "longitude": "72.9"},
            {"pincode": "4000", "district": "X", "statename": "Y", "latitude": "1", "longitude": "2"},
            {"pincode": "400098", "district": "X", "statename": "Y", "latitude": "NA", "longitude": "72.9"},
        ])
        table, skipped = build_table(df)
        assert table == {"400099": {"lat": 19.1, "lng": 72.9, "state": "Maharashtra", "city": "Mumbai"}}
        assert skipped == 2

    def test_clean_coordinate(self):
        assert clean_coordinate(" 19.25 ") == 19.25
        assert clean_coordinate("NA") is None
        assert clean_coordinate(float("nan")) is None
        assert clean_coordinate(None) is None

    def test_update_merges_with_existing_table(self, tmp_path):
        target = tmp_path / "pincodes.json"
        target.write_text(json.dumps({
            "110001": {"lat": 28.6, "lng": 77.2, "state": "Delhi", "city": "New Delhi"},
            "400099": {"lat": 0.0, "lng": 0.0, "state": "Old", "city": "Old"},
        }))
        csv_file = tmp_path / "pincodes.csv"
        csv_file.write_text(
            CSV_HEADER
            + "Maharashtra,Mumbai,Mumbai,Some PO,400099,PO,Delivery,Mumbai,Maharashtra,19.1,72.9\n"
        )

        assert update_pincode_table(csv_file, target) == 2
        table = json.loads(target.read_text())
        assert table["400099"]["state"] == "Maharashtra"
        assert table["110001"]["city"] == "New Delhi"
