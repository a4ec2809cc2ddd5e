#!/usr/bin/env python3
"""
Energy Reading Simulation Script

Logs in (registering the user on first run) and posts a stream of synthetic
household power/energy/cost readings to a running Energy Monitor API.
Timestamps are assigned by the server, so readings are sent in real time.
"""

import requests
import random
import time
import json
import argparse
from datetime import datetime
from typing import Dict, Any
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Configuration
BASE_URL = "http://localhost:3001/api"
TARIFF_PER_KWH = 0.16

# Household load profile in watts by hour of day
BASE_LOAD = 180
HOURLY_EXTRA = {
    7: 900, 8: 700,                          # morning kettle, toaster
    12: 400, 13: 300,
    18: 1500, 19: 1800, 20: 1200, 21: 800,   # cooking and evening use
}


class ReadingSimulator:
    """Energy reading simulator"""

    def __init__(self, base_url: str = BASE_URL, tariff: float = TARIFF_PER_KWH):
        self.base_url = base_url
        self.tariff = tariff
        self.session = requests.Session()
        self.token = None

    def _use_token(self, token: str) -> None:
        self.token = token
        self.session.headers.update({
            "Authorization": f"Bearer {self.token}"
        })

    def authenticate(self, email: str, password: str) -> bool:
        """Login, falling back to registration for a new user"""
        try:
            response = self.session.post(
                f"{self.base_url}/login",
                json={"email": email, "password": password}
            )

            if response.status_code == 200:
                self._use_token(response.json()["token"])
                logger.info(f"Successfully authenticated as {email}")
                return True
            elif response.status_code == 401:
                logger.info("Login failed, attempting to register new user...")
                return self.register_user(email, password)
            else:
                logger.error(f"Authentication failed: {response.status_code} - {response.text}")
                return False

        except requests.RequestException as e:
            logger.error(f"Authentication error: {e}")
            return False

    def register_user(self, email: str, password: str, first_name: str = "Demo", last_name: str = "User") -> bool:
        """Register a new user"""
        try:
            response = self.session.post(
                f"{self.base_url}/register",
                json={
                    "email": email,
                    "firstName": first_name,
                    "lastName": last_name,
                    "password": password
                }
            )

            if response.status_code == 200:
                self._use_token(response.json()["token"])
                logger.info(f"Successfully registered and authenticated as {email}")
                return True
            else:
                logger.error(f"Registration failed: {response.status_code} - {response.text}")
                return False

        except requests.RequestException as e:
            logger.error(f"Registration error: {e}")
            return False

    def calculate_power(self, timestamp: datetime) -> float:
        """Household power draw in watts at the given time"""
        power = BASE_LOAD + HOURLY_EXTRA.get(timestamp.hour, 0)
        power += random.uniform(-0.15, 0.15) * power
        return max(0, round(power, 2))

    def build_reading(self, timestamp: datetime, interval_seconds: float) -> Dict[str, float]:
        """Power, energy over the interval, and its cost"""
        power = self.calculate_power(timestamp)
        energy = round(power * interval_seconds / 3600, 2)
        cost = round(energy / 1000 * self.tariff, 4)
        return {"power": power, "energy": energy, "cost": cost}

    def send_reading(self, reading: Dict[str, float]) -> bool:
        """Send one reading to the API"""
        try:
            response = self.session.post(f"{self.base_url}/readings", json=reading)

            if response.status_code == 200:
                return True
            else:
                logger.error(f"Failed to send reading: {response.status_code} - {response.text}")
                return False

        except requests.RequestException as e:
            logger.error(f"Error sending reading: {e}")
            return False

    def run(self, count: int, interval: float) -> Dict[str, Any]:
        """Send ``count`` readings, one every ``interval`` seconds"""
        successful_sends = 0
        failed_sends = 0

        logger.info(f"Sending {count} readings every {interval}s")
        start_simulation = time.time()

        for i in range(count):
            reading = self.build_reading(datetime.now(), interval)

            if self.send_reading(reading):
                successful_sends += 1
            else:
                failed_sends += 1

            if (i + 1) % 10 == 0:
                logger.info(f"Sent {i + 1}/{count} - Success: {successful_sends}, Failed: {failed_sends}")

            if interval > 0 and i + 1 < count:
                time.sleep(interval)

        duration = time.time() - start_simulation

        results = {
            "total_points": count,
            "successful_sends": successful_sends,
            "failed_sends": failed_sends,
            "success_rate": (successful_sends / count) * 100 if count > 0 else 0,
            "duration_seconds": duration
        }

        logger.info("Simulation completed!")
        logger.info(f"Results: {json.dumps(results, indent=2)}")

        return results


def main():
    """Main function"""
    parser = argparse.ArgumentParser(description="Energy Monitor Reading Simulator")
    parser.add_argument("--base-url", default=BASE_URL, help="API base URL")
    parser.add_argument("--email", default="demo@energy.local", help="User email for authentication")
    parser.add_argument("--password", default="demo-password", help="User password")
    parser.add_argument("--count", type=int, default=60, help="Number of readings to send")
    parser.add_argument("--interval", type=float, default=5, help="Seconds between readings")
    parser.add_argument("--tariff", type=float, default=TARIFF_PER_KWH, help="Price per kWh")

    args = parser.parse_args()

    simulator = ReadingSimulator(args.base_url, args.tariff)

    if not simulator.authenticate(args.email, args.password):
        logger.error("Authentication failed. Cannot proceed with simulation.")
        return

    try:
        results = simulator.run(args.count, args.interval)

        if results["success_rate"] < 90:
            logger.warning(f"Low success rate: {results['success_rate']:.1f}%")
        else:
            logger.info(f"Simulation successful with {results['success_rate']:.1f}% success rate")

    except KeyboardInterrupt:
        logger.info("Simulation interrupted by user")


if __name__ == "__main__":
    main()
