"""
Tests for application settings
"""

import pytest
from pydantic import ValidationError

from config import Settings


class TestTimezoneSetting:
    
    @pytest.mark.unit
    def test_known_zone_accepted(self):
        assert Settings(TIMEZONE="America/New_York").TIMEZONE == "America/New_York"
    
    @pytest.mark.unit
    def test_unknown_zone_rejected(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            Settings(TIMEZONE="Mars/Olympus_Mons")
