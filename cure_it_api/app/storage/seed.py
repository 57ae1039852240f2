"""
Default contact directory.

Inserted into an empty store on startup when ``SEED_DATA`` is enabled,
so a fresh deployment can answer directory queries for the major
metro areas before an administrator adds anything.
"""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


DEFAULT_CONTACTS: List[Dict[str, Any]] = [
    # Mumbai
    {
        "name": "Mumbai Police Control Room",
        "designation": "Emergency Response",
        "facility": "Mumbai Police Department",
        "service_type": "police",
        "phone": "100",
        "alternate_phone": "022-22621855",
        "email": "control@mumbaipolice.gov.in",
        "address": "Police Headquarters, Crawford Market, Mumbai",
        "city": "Mumbai",
        "state": "Maharashtra",
    },
    {
        "name": "Bombay Hospital",
        "designation": "Emergency Department",
        "facility": "Bombay Hospital & Medical Research Centre",
        "service_type": "medical",
        "phone": "022-22067676",
        "alternate_phone": "022-22067677",
        "email": "emergency@bombayhospital.com",
        "address": "12, New Marine Lines, Mumbai",
        "city": "Mumbai",
        "state": "Maharashtra",
    },
    {
        "name": "Mumbai Fire Brigade",
        "designation": "Fire Emergency",
        "facility": "Mumbai Fire Brigade",
        "service_type": "fire",
        "phone": "101",
        "alternate_phone": "022-23076111",
        "email": "fire@mumbai.gov.in",
        "address": "Fire Brigade Headquarters, Byculla, Mumbai",
        "city": "Mumbai",
        "state": "Maharashtra",
    },
    {
        "name": "BMC Emergency",
        "designation": "Municipal Services",
        "facility": "Brihanmumbai Municipal Corporation",
        "service_type": "municipal",
        "phone": "022-24937744",
        "alternate_phone": "022-24937745",
        "email": "emergency@bmc.gov.in",
        "address": "BMC Headquarters, CST, Mumbai",
        "city": "Mumbai",
        "state": "Maharashtra",
    },
    # Delhi
    {
        "name": "Delhi Police Control Room",
        "designation": "Emergency Response",
        "facility": "Delhi Police Department",
        "service_type": "police",
        "phone": "100",
        "alternate_phone": "011-23469000",
        "email": "control@delhipolice.gov.in",
        "address": "Police Headquarters, ITO, Delhi",
        "city": "Delhi",
        "state": "Delhi",
    },
    {
        "name": "AIIMS Delhi",
        "designation": "Emergency Department",
        "facility": "All India Institute of Medical Sciences",
        "service_type": "medical",
        "phone": "011-26588500",
        "alternate_phone": "011-26589900",
        "email": "emergency@aiims.edu",
        "address": "Ansari Nagar, Delhi",
        "city": "Delhi",
        "state": "Delhi",
    },
    {
        "name": "Delhi Fire Service",
        "designation": "Fire Emergency",
        "facility": "Delhi Fire Service",
        "service_type": "fire",
        "phone": "101",
        "alternate_phone": "011-23469001",
        "email": "fire@delhi.gov.in",
        "address": "Fire Service Headquarters, Delhi",
        "city": "Delhi",
        "state": "Delhi",
    },
    # Bangalore
    {
        "name": "Bangalore Police Control",
        "designation": "Emergency Response",
        "facility": "Bangalore City Police",
        "service_type": "police",
        "phone": "100",
        "alternate_phone": "080-22942222",
        "email": "control@bangalorepolice.gov.in",
        "address": "Police Commissioner Office, Bangalore",
        "city": "Bangalore",
        "state": "Karnataka",
    },
    {
        "name": "Victoria Hospital",
        "designation": "Emergency Department",
        "facility": "Victoria Hospital",
        "service_type": "medical",
        "phone": "080-26701150",
        "alternate_phone": "080-26701151",
        "email": "emergency@victoriahospital.gov.in",
        "address": "Fort Road, Bangalore",
        "city": "Bangalore",
        "state": "Karnataka",
    },
    # Chennai
    {
        "name": "Chennai Police Control",
        "designation": "Emergency Response",
        "facility": "Chennai City Police",
        "service_type": "police",
        "phone": "100",
        "alternate_phone": "044-23452345",
        "email": "control@chennaipolice.gov.in",
        "address": "Police Commissioner Office, Chennai",
        "city": "Chennai",
        "state": "Tamil Nadu",
    },
    {
        "name": "Government General Hospital",
        "designation": "Emergency Department",
        "facility": "Government General Hospital",
        "service_type": "medical",
        "phone": "044-25305000",
        "alternate_phone": "044-25305001",
        "email": "emergency@gghchennai.gov.in",
        "address": "Park Town, Chennai",
        "city": "Chennai",
        "state": "Tamil Nadu",
    },
]


def seed_contacts(storage) -> int:
    """Insert ``DEFAULT_CONTACTS`` with ids ``contact-1`` .. ``contact-N``."""
    for index, data in enumerate(DEFAULT_CONTACTS, start=1):
        storage.create_contact(data, contact_id=f"contact-{index}")
    logger.info("Seeded %d default emergency contacts", len(DEFAULT_CONTACTS))
    return len(DEFAULT_CONTACTS)
