LOGIN = "/api/login/"
CURRENT_USER = "/api/users/me/"
CHANGE_PASSWORD = "/api/users/change-password/"
SET_SPECIALTY = "/api/doctor/set-specialty/"

# Clinic registry
CLINICS = "/api/clinics/"
CREATE_CLINIC = "/api/clinics/create/"
DOCTOR_CLINICS = "/api/clinics/doctor/patients/"
STAFF_CLINICS = "/api/clinics/staff/patients/"

# People
DOCTORS = "/api/management/doctors"
CREATE_USER = "/api/users/create/"
STAFF = "/api/clinics/staff/"
CREATE_STAFF = "/api/doctor/create-staff/"
PATIENTS = "/api/management/patients"
CREATE_PATIENT = "/api/patients/create"

# Medical cases
PATIENT_CASES = "/api/patients/{patient_id}/cases/"
MEDICAL_CASES = "/api/patients/medical-cases/"
MEDICAL_CASE = "/api/patients/medical-cases/{case_id}/"
CREATE_MEDICAL_CASE = "/api/patients/create/medical-case/"
DELETE_MEDICAL_CASE = "/api/patients/medical-cases/{case_id}/delete/"
COMPLICATION = "/api/patients/medical-cases/{case_id}/complication/"
DELETE_COMPLICATION = "/api/patients/medical-cases/{case_id}/complication/delete/"
