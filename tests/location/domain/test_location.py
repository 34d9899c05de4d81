from patisserie.location.location import Hostel, Location


class TestLocation:
    def test_default_delivery_charge(self):
        location = Location.create(city="Coimbatore", area="Peelamedu", pincode="641004")
        assert location.delivery_charge == 49.0

    def test_full_address(self):
        location = Location.create(city=" Coimbatore ", area="Peelamedu", pincode="641004", delivery_charge=30)
        assert location.full_address == "Peelamedu, Coimbatore - 641004"
        assert location.delivery_charge == 30.0

    def test_toggle(self):
        location = Location.create(city="Coimbatore", area="Peelamedu", pincode="641004")
        location.toggle()
        assert location.is_active is False


class TestHostel:
    def test_create_trims_name(self):
        hostel = Hostel.create(name=" Block A ", location_id="loc-1")
        assert hostel.name == "Block A"
        assert hostel.is_active is True

    def test_update_details_keeps_unset_fields(self):
        hostel = Hostel.create(name="Block A", location_id="loc-1", address="North gate")
        hostel.update_details(name="Block B")
        assert hostel.name == "Block B"
        assert hostel.address == "North gate"
