"""
Locust load testing configuration for the glossary reminders API.

Simulates learners during one period:
- Read the current word (40%)
- Check eligibility (30%)
- Check in (20%)
- Leaderboard (10%)

All simulated users share one source IP, so raise AUTH_RATE_LIMIT and
API_RATE_LIMIT on the server under test.

Run: locust -f load_tests/locustfile.py --host http://localhost:3000
"""

import random
from locust import HttpUser, task, between, events
from locust.exception import StopUser

PASSWORD = "load-test-password"


class LearnerUser(HttpUser):
    """
    Simulates a learner using the app.

    Each simulated user signs up once, logs in, then mixes reads with
    check-in attempts. Only the first check-in per period may score; later
    ones must come back 409.
    """

    wait_time = between(1, 5)

    def on_start(self):
        """Create an account and log in"""
        self.username = f"loadtest_{random.randint(1000, 999999)}"
        self.scored_period = None
        self.request_count = 0

        self.client.post("/signup", json={"username": self.username, "password": PASSWORD}, name="Sign Up")
        response = self.client.post("/login", json={"username": self.username, "password": PASSWORD}, name="Login")
        if response.status_code != 200:
            raise StopUser()
        self.headers = {"x-access-token": response.json()["token"]}

    @task(4)
    def read_word(self):
        """Fetch the current period word"""
        with self.client.get("/word-for-interval", catch_response=True, name="Current Word") as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Status {response.status_code}")

        self._count_request()

    @task(3)
    def can_check_in(self):
        """Check eligibility"""
        with self.client.get(
            "/can-check-in", headers=self.headers, catch_response=True, name="Can Check In"
        ) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Status {response.status_code}")

        self._count_request()

    @task(2)
    def check_in(self):
        """
        Attempt a check-in.

        200 is expected only once per period; 409 afterwards is a success.
        """
        with self.client.post(
            "/update-points", headers=self.headers, catch_response=True, name="Check In"
        ) as response:
            if response.status_code == 200:
                if response.json().get("period") == self.scored_period:
                    response.failure("Scored twice in one period")
                else:
                    self.scored_period = response.json().get("period")
                    response.success()
            elif response.status_code in (409, 503):
                response.success()
            else:
                response.failure(f"Status {response.status_code}")

        self._count_request()

    @task(1)
    def leaderboard(self):
        with self.client.get("/leaderboard", catch_response=True, name="Leaderboard") as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"Status {response.status_code}")

        self._count_request()

    def _count_request(self):
        """Stop user after 50 requests"""
        self.request_count += 1
        if self.request_count >= 50:
            raise StopUser()


# Event listeners for custom metrics

@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """Log when load test starts"""
    print("\n" + "=" * 80)
    print("LOAD TEST STARTING")
    print(f"Target: {environment.parsed_options.num_users} concurrent users")
    print("=" * 80 + "\n")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """Log final statistics when test completes"""
    stats = environment.stats

    print("\n" + "=" * 80)
    print("LOAD TEST COMPLETE")
    print(f"Total requests: {stats.total.num_requests}")
    print(f"Failure rate: {stats.total.fail_ratio * 100:.2f}%")
    print(f"P95: {stats.total.get_response_time_percentile(0.95):.2f}ms")
    print(f"RPS: {stats.total.total_rps:.2f}")
    print("=" * 80 + "\n")
